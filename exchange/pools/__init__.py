"""Pool management package.

Provides PoolRegistry, the owner of all reserve and share state.
"""

from .registry import PoolRegistry, RegistrySnapshot
from .types import Pool

__all__ = ["Pool", "PoolRegistry", "RegistrySnapshot"]
