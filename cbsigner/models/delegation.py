from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from cbsigner.crypto.signature import verify_signed_builder_message
from cbsigner.crypto.tree_hash import hash_tree_root_bytes, hash_tree_root_container
from cbsigner.models.chain import Chain
from cbsigner.types import PubkeyField, SignatureField


class ProxyDelegation(BaseModel):
    """Unsigned statement that ``delegator`` authorizes ``proxy`` to sign for it."""

    model_config = ConfigDict(frozen=True)

    delegator: PubkeyField
    proxy: PubkeyField

    def tree_hash_root(self) -> bytes:
        return hash_tree_root_container(
            [hash_tree_root_bytes(self.delegator), hash_tree_root_bytes(self.proxy)]
        )


class SignedProxyDelegation(BaseModel):
    """A delegation plus the delegator's signature over it.

    Together with a message signed by the proxy key this proves, to anyone
    who knows the delegator's public key, which consensus key stands behind
    the proxy signature.
    """

    model_config = ConfigDict(frozen=True)

    message: ProxyDelegation
    signature: SignatureField

    def verify(self, chain: Chain) -> bool:
        return verify_signed_builder_message(
            chain,
            self.message.delegator,
            self.message,
            self.signature,
        )


__all__ = ["ProxyDelegation", "SignedProxyDelegation"]
