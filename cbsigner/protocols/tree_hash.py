from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ObjectTreeHash(Protocol):
    """A message that can be reduced to its 32-byte canonical signing root."""

    def tree_hash_root(self) -> bytes: ...
