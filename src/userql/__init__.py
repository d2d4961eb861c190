"""
userql
Minimal GraphQL service resolving users from an in-memory store
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
