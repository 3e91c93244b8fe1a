"""
notegraph
GraphQL service over users and their notes
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
