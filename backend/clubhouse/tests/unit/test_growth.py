from decimal import Decimal

import pytest

from clubhouse.sales.growth import percent_change


@pytest.mark.parametrize(
    ("current", "previous", "expected"),
    [
        (110, 100, "10.0"),
        (90, 100, "-10.0"),
        (5, 0, "0.0"),
        (0, 0, "0.0"),
        (0, 4, "-100.0"),
        (Decimal("200.00"), Decimal("120.00"), "66.7"),
        (1, 3, "-66.7"),
        (Decimal("100.05"), Decimal("100.00"), "0.1"),
    ],
)
def test_percent_change(current, previous, expected):
    result = percent_change(current, previous)
    assert str(result) == expected
