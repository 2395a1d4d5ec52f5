from mailcss.calc.evaluator import evaluate_calc, resolve_calc_expressions

__all__ = ["evaluate_calc", "resolve_calc_expressions"]
