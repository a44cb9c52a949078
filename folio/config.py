"""Configuration loading for folio.

Settings live in `~/.config/folio/config.toml` (or `$FOLIO_HOME/config.toml`).
Every key is optional:

    [quotes]
    provider = "fallback"   # live | mock | fallback
    timeout = 10.0

    [portfolio]
    path = "~/portfolio.json"
    seed_demo = true

    [search]
    debounce_ms = 350
    min_chars = 2

    [market]
    poll_seconds = 35
"""

import logging
import os
from pathlib import Path
from typing import Literal, Optional

import toml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"
PORTFOLIO_FILENAME = "portfolio.json"


class QuotesConfig(BaseModel):
    provider: Literal["live", "mock", "fallback"] = "fallback"
    timeout: float = Field(default=10.0, gt=0)


class PortfolioConfig(BaseModel):
    path: Optional[Path] = None
    seed_demo: bool = True


class SearchConfig(BaseModel):
    debounce_ms: int = Field(default=350, ge=0)
    min_chars: int = Field(default=2, ge=1)


class MarketConfig(BaseModel):
    poll_seconds: float = Field(default=35.0, gt=0)


class AppConfig(BaseModel):
    """Validated application configuration."""

    quotes: QuotesConfig = Field(default_factory=QuotesConfig)
    portfolio: PortfolioConfig = Field(default_factory=PortfolioConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    market: MarketConfig = Field(default_factory=MarketConfig)

    def portfolio_path(self) -> Path:
        """Where the portfolio snapshot is stored."""
        if self.portfolio.path is not None:
            return self.portfolio.path.expanduser()
        return get_config_dir() / PORTFOLIO_FILENAME


def get_config_dir() -> Path:
    """Get the configuration directory, honouring FOLIO_HOME."""
    home = os.environ.get("FOLIO_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / ".config" / "folio"


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration from a TOML file.

    A missing, unreadable or invalid file yields the defaults.

    Args:
        path: Config file; defaults to `config.toml` in the config dir.

    Returns:
        Validated configuration.
    """
    config_path = path or get_config_dir() / CONFIG_FILENAME

    if not config_path.exists():
        return AppConfig()

    try:
        return AppConfig.model_validate(toml.load(config_path))
    except (OSError, toml.TomlDecodeError, ValidationError) as exc:
        logger.warning("Ignoring invalid config %s: %s", config_path, exc)
        return AppConfig()


def build_quote_port(config: QuotesConfig):
    """Create the quote provider selected in the configuration."""
    from folio.quotes import FallbackQuoteProvider, MockQuoteProvider, YahooQuoteProvider

    if config.provider == "mock":
        return MockQuoteProvider()
    if config.provider == "live":
        return YahooQuoteProvider(timeout=config.timeout)
    return FallbackQuoteProvider(
        primary=YahooQuoteProvider(timeout=config.timeout),
        fallback=MockQuoteProvider(),
    )
