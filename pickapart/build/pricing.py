"""
Pricing helpers

Prices are stored in USD, usually as display text ("$1,299.99").
Conversion to other currencies uses a static rate table.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, List, NamedTuple, Union

_NON_NUMERIC = re.compile(r"[^\d.]")
_CENTS = Decimal("0.01")


class Currency(NamedTuple):
    code: str
    symbol: str
    rate: Decimal  # units per 1 USD


CURRENCIES: Dict[str, Currency] = {
    c.code: c for c in [
        Currency("USD", "$", Decimal("1")),
        Currency("EUR", "€", Decimal("0.92")),
        Currency("GBP", "£", Decimal("0.79")),
        Currency("CAD", "C$", Decimal("1.36")),
        Currency("AUD", "A$", Decimal("1.52")),
        Currency("INR", "₹", Decimal("83.10")),
        Currency("JPY", "¥", Decimal("149.50")),
    ]
}

USD = CURRENCIES["USD"]


def parse_price(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Parse a stored price into a Decimal

    Everything except digits and the decimal point is stripped from text,
    so "$1,299.99" -> 1299.99. Numbers are taken as they are, sign
    dropped. Anything unparseable is worth 0.
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)

    if isinstance(value, (int, float, Decimal)):
        # str() of a float may use exponent notation (1e-05)
        number = Decimal(str(value))
        if not number.is_finite():
            return Decimal(0)
        return abs(number)

    cleaned = _NON_NUMERIC.sub("", str(value))
    if not cleaned:
        return Decimal(0)

    try:
        return Decimal(cleaned)
    except InvalidOperation:
        # e.g. "1.2.3" or a lone "."
        return Decimal(0)


def get_currency(code: str) -> Currency:
    """Look up a currency by code, falling back to USD"""
    currency = CURRENCIES.get((code or "").upper())
    if currency is None:
        print(f"[Pricing] Unknown currency '{code}', using USD")
        return USD
    return currency


def convert(amount_usd: Union[Decimal, int, float], currency: Currency) -> Decimal:
    return (Decimal(str(amount_usd)) * currency.rate).quantize(_CENTS, rounding=ROUND_HALF_UP)


def display(amount_usd: Union[Decimal, int, float], currency: Currency = USD) -> str:
    """Format a USD amount in the given currency, e.g. display(10, EUR) -> '€9.20'"""
    return f"{currency.symbol}{convert(amount_usd, currency):.2f}"


def currency_options() -> List[Dict]:
    return [
        {"code": c.code, "symbol": c.symbol, "rate": float(c.rate)}
        for c in CURRENCIES.values()
    ]
