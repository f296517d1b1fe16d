"""Registry of consensus and proxy signers.

A consensus key never leaves this process. Commit modules get proxy keys
instead: the manager mints a fresh keypair, has the consensus key sign a
``ProxyDelegation`` naming it, and from then on signs on the proxy's behalf.
A faulty proxy-signed message plus its delegation is enough evidence to
slash the consensus key behind it. Delegations are signed in the builder
domain and are never revoked or expired.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from cbsigner.core.logging import SigningScopeFilter, signing_scope
from cbsigner.core.signer import ProxySigner, Signer
from cbsigner.errors import UnknownConsensusSigner, UnknownProxySigner
from cbsigner.models.chain import Chain
from cbsigner.models.delegation import ProxyDelegation, SignedProxyDelegation
from cbsigner.protocols.tree_hash import ObjectTreeHash
from cbsigner.types import BlsPublicKey, BlsSignature, short_hex, to_pubkey

if TYPE_CHECKING:
    from cbsigner.config import SignerSettings

logger = logging.getLogger(__name__)
logger.addFilter(SigningScopeFilter())


class SigningManager:
    """Signs for registered consensus and proxy keys, addressed by public key.

    Each map has its own lock held only around dict access. Signing itself
    runs outside the locks, so requests for different keys never wait on
    each other. Entries are fully constructed before they are inserted.

    Pubkeys may be given as bytes, bytearray or hex; anything that is not 48
    bytes of key material raises ``InvalidPubkeyError`` before any lookup.
    """

    def __init__(self, chain: Chain) -> None:
        self._chain: Chain = chain
        self._consensus_signers: dict[bytes, Signer] = {}
        self._proxy_signers: dict[bytes, ProxySigner] = {}
        self._consensus_lock = threading.Lock()
        self._proxy_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: SignerSettings) -> SigningManager:
        return cls(settings.chain)

    @property
    def chain(self) -> Chain:
        return self._chain

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_consensus_signer(self, signer: Signer) -> None:
        pubkey = signer.pubkey()
        with self._consensus_lock:
            replaced = pubkey in self._consensus_signers
            self._consensus_signers[pubkey] = signer
        with signing_scope(key_role="consensus", pubkey=short_hex(pubkey)):
            logger.info("Registered consensus signer%s", " (replaced existing)" if replaced else "")

    def add_proxy_signer(self, proxy: ProxySigner) -> None:
        pubkey = proxy.signer.pubkey()
        with self._proxy_lock:
            self._proxy_signers[pubkey] = proxy
        with signing_scope(
            key_role="proxy",
            pubkey=short_hex(pubkey),
            delegator=short_hex(proxy.delegation.message.delegator),
        ):
            logger.info("Registered proxy signer")

    async def create_proxy(self, delegator: str | bytes) -> SignedProxyDelegation:
        """Mint a proxy key for *delegator* and return its signed delegation.

        Raises ``UnknownConsensusSigner`` if *delegator* is not registered;
        nothing is stored in that case.
        """
        delegator_key = to_pubkey(delegator)
        with signing_scope(delegator=short_hex(delegator_key)):
            signer = Signer.new_random()
            message = ProxyDelegation(delegator=delegator_key, proxy=signer.pubkey())
            signature = await self.sign_consensus(delegator_key, message)

            delegation = SignedProxyDelegation(message=message, signature=signature)
            self.add_proxy_signer(ProxySigner(signer=signer, delegation=delegation))
        return delegation

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    async def sign_consensus(self, pubkey: str | bytes, message: ObjectTreeHash) -> BlsSignature:
        # TODO: restrict the message types a consensus key may sign once a remote backend exists.
        key = to_pubkey(pubkey)
        with signing_scope(key_role="consensus", pubkey=short_hex(key)):
            with self._consensus_lock:
                signer = self._consensus_signers.get(key)
            if signer is None:
                logger.warning("Sign request for unknown consensus signer")
                raise UnknownConsensusSigner(key)

            logger.debug("Signing")
            return await signer.sign(self._chain, message)

    async def sign_proxy(self, pubkey: str | bytes, message: ObjectTreeHash) -> BlsSignature:
        key = to_pubkey(pubkey)
        with signing_scope(key_role="proxy", pubkey=short_hex(key)):
            with self._proxy_lock:
                proxy = self._proxy_signers.get(key)
            if proxy is None:
                logger.warning("Sign request for unknown proxy signer")
                raise UnknownProxySigner(key)

            logger.debug("Signing")
            return await proxy.signer.sign(self._chain, message)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def consensus_pubkeys(self) -> list[BlsPublicKey]:
        with self._consensus_lock:
            return list(self._consensus_signers)

    def proxy_pubkeys(self) -> list[BlsPublicKey]:
        with self._proxy_lock:
            return list(self._proxy_signers)

    def delegations(self) -> list[SignedProxyDelegation]:
        with self._proxy_lock:
            return [proxy.delegation for proxy in self._proxy_signers.values()]

    def has_consensus(self, pubkey: str | bytes) -> bool:
        key = to_pubkey(pubkey)
        with self._consensus_lock:
            return key in self._consensus_signers

    def has_proxy(self, pubkey: str | bytes) -> bool:
        key = to_pubkey(pubkey)
        with self._proxy_lock:
            return key in self._proxy_signers

    def get_delegation(self, proxy_pubkey: str | bytes) -> SignedProxyDelegation:
        key = to_pubkey(proxy_pubkey)
        with self._proxy_lock:
            proxy = self._proxy_signers.get(key)
        if proxy is None:
            raise UnknownProxySigner(key)
        return proxy.delegation


__all__ = ["SigningManager"]
