"""Signing keys and the proxy signers they authorize.

``Signer`` wraps exactly one key backend. Backends form a closed set so that
every code path touching secret material can be enumerated here; a remote
signer would be one more backend class and one more branch in ``sign``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cbsigner.crypto.signature import (
    random_secret,
    secret_from_bytes,
    secret_to_pubkey,
    sign_builder_message,
)
from cbsigner.models.chain import Chain
from cbsigner.models.delegation import SignedProxyDelegation
from cbsigner.protocols.tree_hash import ObjectTreeHash
from cbsigner.types import BlsPublicKey, BlsSignature, short_hex


@dataclass(frozen=True, slots=True)
class PlainBackend:
    """In-memory secret scalar."""

    _secret: int = field(repr=False)


SignerBackend = PlainBackend


class Signer:
    """Owns one private key and exposes only its public key and signatures."""

    __slots__ = ("_backend", "_pubkey")

    def __init__(self, backend: SignerBackend) -> None:
        if not isinstance(backend, PlainBackend):
            raise TypeError(f"unsupported signer backend: {type(backend).__name__}")
        self._backend: SignerBackend = backend
        self._pubkey: BlsPublicKey = secret_to_pubkey(backend._secret)

    @classmethod
    def new_random(cls) -> Signer:
        return cls(PlainBackend(random_secret()))

    @classmethod
    def new_from_bytes(cls, data: bytes) -> Signer:
        """Build a signer from a 32-byte big-endian secret.

        Raises ``InvalidSecretKeyError`` for malformed key material; callers
        are expected to validate provisioning input before reaching here.
        """
        return cls(PlainBackend(secret_from_bytes(data)))

    def pubkey(self) -> BlsPublicKey:
        return self._pubkey

    async def sign(self, chain: Chain, message: ObjectTreeHash) -> BlsSignature:
        """Sign the builder-domain signing root of *message* for *chain*."""
        backend = self._backend
        if isinstance(backend, PlainBackend):
            return sign_builder_message(chain, backend._secret, message)
        raise TypeError(f"unsupported signer backend: {type(backend).__name__}")

    def __repr__(self) -> str:
        return f"Signer({type(self._backend).__name__}, pubkey={short_hex(self._pubkey)})"


@dataclass(frozen=True, slots=True)
class ProxySigner:
    """A proxy key together with the signed delegation that authorizes it."""

    signer: Signer
    delegation: SignedProxyDelegation

    def __post_init__(self) -> None:
        if self.delegation.message.proxy != self.signer.pubkey():
            raise ValueError("delegation does not name this signer as its proxy")

    def pubkey(self) -> BlsPublicKey:
        return self.signer.pubkey()


__all__ = ["PlainBackend", "ProxySigner", "Signer", "SignerBackend"]
