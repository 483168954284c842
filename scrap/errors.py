
class ScrapError(Exception):
    """ Base class for all Scrap errors"""
    pass


class ScrapUnresolvedReference(ScrapError):
    """ Raised when a name cannot be found in the active scope chain"""

    def __init__(self, name: str):
        super().__init__(f"'{name}' is not defined")
        self.name = name


class ScrapRuntimeError(ScrapError):
    """ Raised for any failure while evaluating a program"""


class ScrapArityError(ScrapRuntimeError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class ScrapTypeError(ScrapRuntimeError):
    """ Raised when a value has the wrong kind for an operation (e.g. calling a non-function)"""


class ScrapUnsupportedConstruct(ScrapRuntimeError):
    """ Raised when the evaluator meets a node kind it does not implement"""


class ScrapSyntaxError(ScrapError):
    """ Raised when the reader cannot parse the source"""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(f"{message} (line {line}, column {column})" if line else message)
        self.line = line
        self.column = column
