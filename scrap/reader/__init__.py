from scrap.reader.lexer import lex, Token
from scrap.reader.parser import Parser
