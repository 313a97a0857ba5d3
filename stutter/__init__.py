# Core type aliases for Stutter's data model.
# Runtime values are plain Python objects: int (Int), float (Dec), bool (Bool),
# list (List), plus the Nil singleton and Lambda. Parsed source is a tree of
# Leaf/Branch nodes (see stutter.reader.parser), never raw Python lists.
#
# Naming guidance:
# - LispValue: use in evaluator/runtime code to denote evaluated values.
# - EvaluatorFn: the evaluator entry point as passed into special forms.

from typing import Any, Callable

# Runtime value alias
LispValue = Any

# Evaluator function type: Python evaluator used inside special forms
EvaluatorFn = Callable[..., LispValue]
