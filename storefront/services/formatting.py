"""Money formatting for storefront prices.

Amounts are shown in whole currency units with South Asian (lakh/crore)
digit grouping, e.g. 125000 -> "৳1,25,000".
"""

from dataclasses import dataclass
import math

from storefront.settings import get_settings


@dataclass(frozen=True)
class PriceParts:
    """Currency symbol and formatted amount, styled separately by the UI."""

    symbol: str
    amount: str
    code: str


def _group_lakh(digits: str) -> str:
    """Insert separators: last three digits, then pairs."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs: list[str] = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_amount(amount: float) -> str:
    """Format an amount as whole units with lakh grouping (no symbol)."""
    whole = int(math.floor(abs(amount) + 0.5))
    sign = "-" if amount < 0 and whole else ""
    return f"{sign}{_group_lakh(str(whole))}"


def format_price_parts(amount: float) -> PriceParts:
    settings = get_settings()
    return PriceParts(
        symbol=settings.currency_symbol.strip(),
        amount=format_amount(amount),
        code=settings.currency_code,
    )


def format_price(amount: float) -> str:
    """Format a price with the configured currency symbol.

    Example:
        >>> format_price(125000)
        "৳1,25,000"
    """
    parts = format_price_parts(amount)
    if parts.amount.startswith("-"):
        return f"-{parts.symbol}{parts.amount[1:]}"
    return f"{parts.symbol}{parts.amount}"


def format_emi(amount: float, months: int | None = None) -> str:
    """Format the monthly installment for an amount, rounded up.

    Args:
        amount: Full price.
        months: Installment count (default: settings.emi_default_months).

    Raises:
        ValueError: If months is below 1.
    """
    if months is None:
        months = get_settings().emi_default_months
    if months < 1:
        raise ValueError(f"months must be >= 1, got {months}")
    return f"{format_price(math.ceil(amount / months))}/month"
