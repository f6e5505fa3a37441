"""
Projection of ledger accounts into display-ready snapshots.

Amounts are kept at full precision inside the ledger and only rounded here,
to PRECISION decimal places using round-half-up (away from zero). The total
is computed from the unrounded available and held values and rounded on its
own, so it can differ in the last place from the sum of the rounded parts.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List

from models import AccountSnapshot, ClientAccount

PRECISION = 4

ZERO = Decimal("0")


def scale_of(value: Decimal) -> int:
    """Number of digits after the decimal point in value's representation."""
    exponent = value.as_tuple().exponent
    return -exponent if exponent < 0 else 0


def clamp_precision(value: Decimal, max_scale: int = PRECISION) -> Decimal:
    """
    Rescale value down to max_scale decimal places if it has more.
    Values already within max_scale are returned as they are, so applying
    this twice is the same as applying it once. Any zero becomes Decimal("0").
    """
    if value.is_zero():
        return ZERO
    if scale_of(value) > max_scale:
        value = value.quantize(Decimal(1).scaleb(-max_scale), rounding=ROUND_HALF_UP)
        if value.is_zero():
            return ZERO
    return value


def round_amount(value: Decimal) -> Decimal:
    return clamp_precision(value, PRECISION)


def format_amount(value: Decimal) -> str:
    """Plain decimal text clamped to PRECISION, without exponent or trailing zeros (100, 89.5, -0.0001)."""
    value = clamp_precision(value)
    if value == value.to_integral_value():
        return f"{value.quantize(Decimal(1)):f}"
    return f"{value.normalize():f}"


def project_account(account: ClientAccount) -> AccountSnapshot:
    return AccountSnapshot(
        client_id=account.client_id,
        available=round_amount(account.available),
        held=round_amount(account.held),
        total=round_amount(account.total),
        locked=account.locked,
    )


def build_report(accounts: Iterable[ClientAccount]) -> List[AccountSnapshot]:
    """Snapshot every account. Order follows the input and carries no meaning."""
    return [project_account(account) for account in accounts]
