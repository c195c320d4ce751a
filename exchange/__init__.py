"""Constant-Product Exchange - Python Implementation."""

from exchange.config import EngineConfig
from exchange.engine import Exchange

__version__ = "0.1.0"
__all__ = ["Exchange", "EngineConfig", "__version__"]
