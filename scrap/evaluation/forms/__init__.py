"""Evaluation of individual constructs.

Each form takes the evaluator, the node and the active scope, and is called
from the dispatch in scrap.evaluation.evaluator.
"""
