"""Comparison expressions for numeric and date filters.

Expressions have the form ``<operator> <target>``, e.g. ``"> 10K"``,
``"<= 2"`` or ``"since 2024-01-01"``. A bare target means equality.
"""

import operator
import re
from collections.abc import Callable
from datetime import datetime

_OPERATORS: dict[str, Callable[[float, float], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
    "=": operator.eq,
    "!=": operator.ne,
}

# Word operators accepted by date expressions
_DATE_OPERATORS: dict[str, str] = {
    "since": ">=",
    "after": ">",
    "until": "<",
    "before": "<",
}

# Size magnitudes: k/m/g are powers of 1000, ki/mi/gi powers of 1024
_MAGNITUDES: dict[str, int] = {
    "": 1,
    "k": 1000,
    "ki": 1024,
    "m": 1000**2,
    "mi": 1024**2,
    "g": 1000**3,
    "gi": 1024**3,
}

_NUMBER_PATTERN = re.compile(
    r"^\s*(?P<op>[<>]=?|==?|!=)?\s*(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>[kmg]i?)?\s*$",
    re.IGNORECASE,
)
_DATE_PATTERN = re.compile(
    r"^\s*(?P<op>[<>]=?|==?|!=|since|after|until|before)?\s*(?P<value>\S.*?)\s*$",
    re.IGNORECASE,
)


class Comparator:
    """A parsed ``<operator> <target>`` expression.

    Attributes:
        operator: Normalized operator string.
        target: Numeric target value the tested value is compared against.
    """

    def __init__(self, op: str, target: float) -> None:
        self.operator = "==" if op == "=" else op
        self.target = target

    def test(self, value: float) -> bool:
        """Check whether a value satisfies the expression."""
        return _OPERATORS[self.operator](value, self.target)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.operator!r}, {self.target!r})"


class NumberComparator(Comparator):
    """Numeric comparison with optional size magnitude suffix."""

    def __init__(self, expression: str | int) -> None:
        match = _NUMBER_PATTERN.match(str(expression))
        if match is None:
            msg = f"Invalid number comparison: {expression!r}"
            raise ValueError(msg)

        target = float(match.group("value"))
        unit = (match.group("unit") or "").lower()
        super().__init__(match.group("op") or "==", target * _MAGNITUDES[unit])


class DateComparator(Comparator):
    """Comparison of POSIX timestamps against an ISO 8601 date."""

    def __init__(self, expression: str | datetime) -> None:
        if isinstance(expression, datetime):
            super().__init__("==", expression.timestamp())
            return

        match = _DATE_PATTERN.match(expression)
        if match is None:
            msg = f"Invalid date comparison: {expression!r}"
            raise ValueError(msg)

        op = (match.group("op") or "==").lower()
        op = _DATE_OPERATORS.get(op, op)
        try:
            target = datetime.fromisoformat(match.group("value"))
        except ValueError as e:
            msg = f"Invalid date comparison: {expression!r}"
            raise ValueError(msg) from e
        super().__init__(op, target.timestamp())
