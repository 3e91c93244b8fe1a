"""
Request-scoped context handed to every resolver
"""

from typing import Any

import strawberry

from ..store.base import NoteStore


def build_context(store: NoteStore, request: Any = None) -> dict[str, Any]:
    """Build the context dict passed to ``schema.execute``."""
    return {
        "request": request,
        "store": store,
    }


def get_store(info: strawberry.Info) -> NoteStore:
    """Get the note store bound to the current execution."""
    store = info.context.get("store")
    if store is None:
        raise RuntimeError("No note store in GraphQL context")
    return store
