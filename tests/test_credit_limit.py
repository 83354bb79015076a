import os
import sys
from math import isclose

# Add the parent directory to the Python path so we can import the aiosim package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aiosim.credit_limit import calculate_credit_limit, credit_limit_curve


def test_initial_credit_limit():
    assert isclose(calculate_credit_limit(1000000, 0.80, 0), 800000)


def test_linear_decline():
    assert isclose(calculate_credit_limit(1000000, 0.80, 120), 400000)
    assert isclose(calculate_credit_limit(1000000, 0.80, 60), 600000)
    assert isclose(calculate_credit_limit(500000, 0.90, 24), 450000 * 216 / 240)


def test_zero_after_draw_period():
    assert calculate_credit_limit(1000000, 0.80, 240) == 0
    assert calculate_credit_limit(1000000, 0.80, 300) == 0


def test_never_increases():
    limits = [calculate_credit_limit(750000, 0.75, m) for m in range(0, 260)]
    for previous, current in zip(limits, limits[1:]):
        assert current <= previous
    assert all(limit >= 0 for limit in limits)


def test_negative_months_treated_as_start():
    assert isclose(calculate_credit_limit(1000000, 0.80, -3), 800000)


def test_custom_decline_period():
    assert isclose(calculate_credit_limit(1000000, 0.80, 60, decline_months=120), 400000)


def test_credit_limit_curve():
    curve = credit_limit_curve(1000000, 0.80, 12)
    assert len(curve) == 12
    assert isclose(curve[0], 800000)
    assert isclose(curve[11], 800000 * 229 / 240)
