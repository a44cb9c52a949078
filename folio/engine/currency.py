"""Static currency conversion to USD."""

# Units of USD per one unit of the currency.
USD_RATES: dict[str, float] = {
    "USD": 1.00,
    "EUR": 1.09,
    "PLN": 0.25,
    "RUB": 0.011,
}

DEFAULT_RATE = 1.0


def usd_rate(currency: str) -> float:
    """Get the USD rate for a currency code.

    Unknown currencies are treated as USD-equivalent.

    Args:
        currency: ISO-like currency code (case-insensitive).

    Returns:
        USD per unit of the currency.
    """
    return USD_RATES.get((currency or "").upper(), DEFAULT_RATE)


def to_usd(amount: float, currency: str) -> float:
    """Convert an amount in `currency` to its USD equivalent."""
    return amount * usd_rate(currency)


def supported_currencies() -> list[str]:
    return list(USD_RATES)
