from __future__ import annotations
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

def format_currency(amount: float) -> str:
    """CAD in en-CA style: 25000000 -> '$25,000,000.00'."""
    q = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if q < 0 else ""
    return f"{sign}${abs(q):,.2f}"

def format_date(d: date) -> str:
    # en-CA short date is ISO order
    return d.isoformat()

def mailto(address: str | None) -> str | None:
    return f"mailto:{address}" if address else None
