"""Fixed-point integer arithmetic for proportional splits.

Rates are stored scaled by a precision multiplier so that sub-unit accuracy
survives integer-only math. All division truncates toward zero, which for the
non-negative operands used here is floor division. The truncated remainder
(dust) stays in the pool.

Example:
    rate = rate_for_total(2_000_000, 1_000_000, PRECISION)   # 2_000_000
    proportional_amount(100_000, rate, PRECISION)             # 200_000
"""

from .errors import DivisionByZero, InvalidAmount

PRECISION = 1_000_000


def require_whole_amount(value, name: str = "amount") -> int:
    """Return `value` if it is a plain int; bools and floats are rejected.

    Raises:
        InvalidAmount: If value is not an int
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(f"{name} must be a whole number, got {value!r}")
    return value


def _check_operands(precision: int, **operands: int) -> None:
    require_whole_amount(precision, "precision")
    for name, value in operands.items():
        require_whole_amount(value, name)
    if precision <= 0:
        raise InvalidAmount(f"precision must be positive, got {precision}")
    for name, value in operands.items():
        if value < 0:
            raise InvalidAmount(f"{name} must be non-negative, got {value}")


def proportional_amount(quantity: int, rate: int, precision: int = PRECISION) -> int:
    """Amount owed for `quantity` units at a fixed-point `rate`.

    Args:
        quantity: Number of units held
        rate: Per-unit rate scaled by `precision`
        precision: Fixed-point scaling factor

    Returns:
        floor(quantity * rate / precision)
    """
    _check_operands(precision, quantity=quantity, rate=rate)
    return (quantity * rate) // precision


def rate_for_total(deposit: int, total_units: int, precision: int = PRECISION) -> int:
    """Per-unit rate (scaled by `precision`) for splitting `deposit` across `total_units`.

    Args:
        deposit: Amount being distributed
        total_units: Units outstanding at this instant
        precision: Fixed-point scaling factor

    Returns:
        floor(deposit * precision / total_units)

    Raises:
        DivisionByZero: If total_units is 0. Callers must require a positive
            share total before asking for a rate.
    """
    _check_operands(precision, deposit=deposit, total_units=total_units)
    if total_units == 0:
        raise DivisionByZero("cannot compute a rate over zero units")
    return (deposit * precision) // total_units
