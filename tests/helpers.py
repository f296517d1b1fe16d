from __future__ import annotations

from dataclasses import dataclass

from cbsigner.crypto.tree_hash import hash_tree_root_bytes, hash_tree_root_container


@dataclass(frozen=True)
class SlotCommitment:
    """Minimal commit-module message: a slot number and a 32-byte payload root."""

    slot: int
    payload_root: bytes

    def tree_hash_root(self) -> bytes:
        return hash_tree_root_container(
            [
                hash_tree_root_bytes(self.slot.to_bytes(8, "little")),
                hash_tree_root_bytes(self.payload_root),
            ]
        )


def secret_bytes(value: int) -> bytes:
    return value.to_bytes(32, "big")
