"""Tests for number and date comparison expressions."""

from datetime import datetime

import pytest
from fskit.finder.comparators import DateComparator, NumberComparator


class TestNumberComparator:
    """Tests for NumberComparator."""

    def test_bare_number_is_equality(self) -> None:
        """A bare target compares for equality."""
        comparator = NumberComparator(2)
        assert comparator.operator == "=="
        assert comparator.test(2)
        assert not comparator.test(3)

    @pytest.mark.parametrize(
        ("expression", "value", "expected"),
        [
            ("< 3", 2, True),
            ("< 3", 3, False),
            ("<= 3", 3, True),
            ("> 1", 1, False),
            (">= 1", 1, True),
            ("!= 0", 0, False),
            ("==5", 5, True),
        ],
    )
    def test_operators(self, expression: str, value: int, expected: bool) -> None:
        """Each operator compares as expected."""
        assert NumberComparator(expression).test(value) is expected

    def test_magnitudes(self) -> None:
        """k/m/g are powers of 1000, ki/mi/gi powers of 1024."""
        assert NumberComparator("1k").target == 1000
        assert NumberComparator("1Ki").target == 1024
        assert NumberComparator("> 2M").target == 2_000_000
        assert NumberComparator("1gi").target == 1024**3

    def test_invalid(self) -> None:
        """Unparseable expressions raise ValueError."""
        with pytest.raises(ValueError, match="Invalid number comparison"):
            NumberComparator("about 3")


class TestDateComparator:
    """Tests for DateComparator."""

    def test_since(self) -> None:
        """since accepts the target date and later."""
        comparator = DateComparator("since 2024-01-01")
        target = datetime(2024, 1, 1).timestamp()

        assert comparator.operator == ">="
        assert comparator.test(target)
        assert comparator.test(target + 10)
        assert not comparator.test(target - 10)

    def test_before(self) -> None:
        """before and until accept strictly earlier times."""
        target = datetime(2024, 6, 1).timestamp()
        assert DateComparator("before 2024-06-01").test(target - 1)
        assert not DateComparator("until 2024-06-01").test(target)

    def test_symbolic_operator(self) -> None:
        """Symbolic operators work with ISO dates."""
        comparator = DateComparator("> 2024-01-01T12:00:00")
        assert comparator.test(datetime(2024, 1, 2).timestamp())

    def test_datetime_object(self) -> None:
        """A datetime compares for equality."""
        moment = datetime(2024, 3, 4, 5, 6, 7)
        assert DateComparator(moment).test(moment.timestamp())

    def test_invalid_date(self) -> None:
        """Unparseable dates raise ValueError."""
        with pytest.raises(ValueError, match="Invalid date comparison"):
            DateComparator("since yesterday")
