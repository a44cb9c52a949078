"""Demo portfolio used to seed a fresh installation."""

from datetime import date

from folio.models import PortfolioState, Position, TradeRecord


def _position(id, ticker, name, asset_class, quantity, price, cost, currency="USD"):
    return Position(
        id=id,
        ticker=ticker,
        name=name,
        asset_class=asset_class,
        quantity=quantity,
        current_price=price,
        average_cost=cost,
        base_currency=currency,
    )


def demo_state() -> PortfolioState:
    """A diversified sample portfolio with a short ledger."""
    positions = [
        _position(1, "AAPL", "Apple Inc.", "equity", 150, 185.20, 180.00),
        _position(2, "MSFT", "Microsoft Corp.", "equity", 100, 378.85, 365.00),
        _position(3, "GOOGL", "Alphabet Inc.", "equity", 50, 142.56, 135.00),
        _position(4, "TSLA", "Tesla Inc.", "equity", 25, 248.50, 220.00),
        _position(5, "NVDA", "NVIDIA Corp.", "equity", 75, 195.40, 180.00),
        _position(6, "TLT", "iShares 20+ Year Bond ETF", "bond", 500, 95.40, 98.00),
        _position(7, "VGIT", "Vanguard Intermediate Bond ETF", "bond", 800, 62.15, 64.00),
        _position(8, "HYG", "iShares High Yield Bond ETF", "bond", 300, 78.90, 80.50),
        _position(9, "BTC", "Bitcoin", "cryptocurrency", 0.5, 67500.00, 55000.00),
        _position(10, "ETH", "Ethereum", "cryptocurrency", 4.2, 3850.00, 3200.00),
        _position(11, "USD-CASH", "US Dollar Cash", "cash", 15000, 1.00, 1.00),
        _position(12, "EUR-CASH", "Euro Cash", "cash", 8000, 1.09, 1.09, "EUR"),
        _position(13, "PLN-CASH", "Polish Zloty Cash", "cash", 20000, 0.25, 0.25, "PLN"),
    ]
    ledger = [
        TradeRecord(id=14, kind="deposit", ticker="USD-CASH", quantity=15000, price=1.00,
                    trade_date=date(2024, 1, 1), trade_value=15000),
        TradeRecord(id=15, kind="buy", ticker="AAPL", quantity=150, price=180.00,
                    trade_date=date(2024, 1, 15), trade_value=27000),
        TradeRecord(id=16, kind="buy", ticker="MSFT", quantity=100, price=365.00,
                    trade_date=date(2024, 2, 1), trade_value=36500),
    ]
    return PortfolioState(positions=positions, ledger=ledger)
