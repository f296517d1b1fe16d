"""SSZ merkleization for the fixed-size values signed by this package.

Only what the signing path needs is covered: fixed-length byte vectors
(``Bytes4``, ``Bytes32``, ``Bytes48``) and containers of already-rooted
fields. Rules follow consensus-layer SSZ:

- values are packed into 32-byte chunks, right-padded with zeros;
- chunk lists are padded with zero chunks to the next power of two;
- parent = sha256(left + right);
- a container root is the merkleization of its field roots, in order.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

BYTES_PER_CHUNK = 32
ZERO_CHUNK = b"\x00" * BYTES_PER_CHUNK


def _hash(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def _next_power_of_two(count: int) -> int:
    if count <= 1:
        return 1
    return 1 << (count - 1).bit_length()


def pack_bytes(data: bytes) -> list[bytes]:
    """Split *data* into 32-byte chunks, zero-padding the last one."""
    if not data:
        return [ZERO_CHUNK]
    chunks: list[bytes] = []
    for offset in range(0, len(data), BYTES_PER_CHUNK):
        chunk = data[offset : offset + BYTES_PER_CHUNK]
        chunks.append(chunk.ljust(BYTES_PER_CHUNK, b"\x00"))
    return chunks


def merkleize_chunks(chunks: Sequence[bytes]) -> bytes:
    """Merkle root of *chunks*, padded with zero chunks to a power of two."""
    for chunk in chunks:
        if len(chunk) != BYTES_PER_CHUNK:
            raise ValueError(f"chunk must be {BYTES_PER_CHUNK} bytes, got {len(chunk)}")

    width = _next_power_of_two(len(chunks))
    level: list[bytes] = list(chunks) + [ZERO_CHUNK] * (width - len(chunks))
    while len(level) > 1:
        level = [_hash(level[i] + level[i + 1]) for i in range(0, len(level), 2)]
    return level[0]


def hash_tree_root_bytes(data: bytes) -> bytes:
    """Root of a fixed-length byte vector (``BytesN``)."""
    return merkleize_chunks(pack_bytes(data))


def hash_tree_root_container(field_roots: Sequence[bytes]) -> bytes:
    """Root of a container whose fields have already been rooted."""
    return merkleize_chunks(field_roots)


__all__ = [
    "BYTES_PER_CHUNK",
    "ZERO_CHUNK",
    "hash_tree_root_bytes",
    "hash_tree_root_container",
    "merkleize_chunks",
    "pack_bytes",
]
