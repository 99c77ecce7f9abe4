"""Two-asset constant-product exchange engine."""

from dex.exchange import Exchange, create_exchange, get_default_exchange

__version__ = "0.1.0"
__all__ = ["Exchange", "create_exchange", "get_default_exchange", "__version__"]
