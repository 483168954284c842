from scrap.evaluation.evaluator import Evaluator
