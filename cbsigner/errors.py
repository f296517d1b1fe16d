"""Error taxonomy for signing requests.

``SignError`` subclasses are recoverable lookups that failed: the caller
addressed a key this process does not hold. ``InvalidSecretKeyError`` and
``InvalidPubkeyError`` reject malformed key material before any lookup and
sit outside that hierarchy.
"""

from __future__ import annotations


class SignError(Exception):
    """Base class for failures raised by ``SigningManager`` operations."""

    kind = "sign_error"

    def __init__(self, pubkey: bytes) -> None:
        if not isinstance(pubkey, bytes | bytearray):
            raise TypeError(f"pubkey must be bytes, got {type(pubkey).__name__}")
        self.pubkey: bytes = bytes(pubkey)
        super().__init__(f"{self.kind}: 0x{self.pubkey.hex()}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SignError):
            return NotImplemented
        return type(self) is type(other) and self.pubkey == other.pubkey

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.pubkey))


class UnknownConsensusSigner(SignError):
    kind = "unknown consensus signer"


class UnknownProxySigner(SignError):
    kind = "unknown proxy signer"


class InvalidSecretKeyError(ValueError):
    """Raised when raw bytes do not encode a usable BLS secret key."""


class InvalidPubkeyError(ValueError):
    """Raised when a value addressed as a public key is not 48 bytes of key material."""


__all__ = [
    "InvalidPubkeyError",
    "InvalidSecretKeyError",
    "SignError",
    "UnknownConsensusSigner",
    "UnknownProxySigner",
]
