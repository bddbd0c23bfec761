# Area: Handlers
"""
edugame._handlers.conditions — Typed value comparison
=====================================================

All comparisons against the free-form variable map go through
``compare_values``. Operands are coerced explicitly:

* both sides numeric (numbers, or strings that parse as numbers)
  -> compared as floats
* otherwise ``==`` and ``!=`` compare the string forms, and the
  ordering operators are False

A missing variable (None) only satisfies ``!=``.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Dict, Optional

_ORDERING: Dict[str, Callable[[float, float], bool]] = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


def to_number(value: Any) -> Optional[float]:
    """Coerce ``value`` to a float, or None when it is not numeric."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def compare_values(left: Any, op: str, right: Any) -> bool:
    """Evaluate ``left <op> right`` with explicit coercion."""
    if left is None:
        return op == "!=" and right is not None

    left_num, right_num = to_number(left), to_number(right)
    numeric = left_num is not None and right_num is not None

    if op in ("==", "!="):
        if numeric:
            equal = left_num == right_num
        else:
            equal = to_text(left) == to_text(right)
        return equal if op == "==" else not equal

    compare = _ORDERING.get(op)
    if compare is None:
        raise ValueError(f"Unknown comparison operator: {op}")
    if not numeric:
        return False
    return compare(left_num, right_num)


def evaluate_condition(
    condition: Any,
    variables: Dict[str, Any],
    score: int = 0,
    inventory: Optional[list] = None,
) -> bool:
    """
    Evaluate a narrative ChoiceCondition.

    ``variable`` compares a variable, ``score`` compares the session
    score, ``item`` checks inventory membership of ``value`` (or of
    ``variable`` when no value is given).
    """
    if condition is None:
        return True
    kind = condition.type
    op = condition.operator
    if kind == "score":
        return compare_values(score, op, condition.value)
    if kind == "item":
        item = condition.value if condition.value is not None else condition.variable
        present = str(item) in (inventory or [])
        return not present if op == "!=" else present
    return compare_values(variables.get(condition.variable), op, condition.value)
