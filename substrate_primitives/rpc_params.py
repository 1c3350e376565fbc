"""Builder for positional JSON-RPC parameters."""

from __future__ import annotations

import json
from typing import Any

__all__ = ["RpcParams"]


class RpcParams:
    """Collects positional parameters and renders them as a JSON array."""

    def __init__(self) -> None:
        self._items: list[str] = []

    def insert(self, value: Any) -> None:
        """Serialise ``value`` to JSON and append it."""
        self._items.append(
            json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        )

    def insert_with_allocation(self, value: Any) -> None:
        """Serialise ``value`` to JSON and append it (same result as :meth:`insert`)."""
        self.insert(value)

    def build(self) -> str | None:
        """Return the parameters as a JSON array string, or None if none were inserted."""
        if not self._items:
            return None
        return "[" + ",".join(self._items) + "]"

    def to_json_value(self) -> Any:
        """Return the parameters as a parsed JSON value; ``[None]`` when empty."""
        built = self.build()
        if built is None:
            return [None]
        return json.loads(built)

    def __repr__(self) -> str:
        return f"RpcParams({self.build()!r})"