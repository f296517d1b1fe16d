"""Domain-separated BLS signing of builder-domain messages."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from py_ecc.bls import G2ProofOfPossession as bls
from py_ecc.optimized_bls12_381 import curve_order

from cbsigner.crypto.tree_hash import hash_tree_root_bytes, hash_tree_root_container
from cbsigner.errors import InvalidSecretKeyError
from cbsigner.protocols.tree_hash import ObjectTreeHash
from cbsigner.types import BLS_SECRET_KEY_LEN, BlsPublicKey, BlsSignature

if TYPE_CHECKING:
    from cbsigner.models.chain import Chain

DOMAIN_APPLICATION_BUILDER = bytes.fromhex("00000001")
GENESIS_VALIDATORS_ROOT = b"\x00" * 32


def random_secret() -> int:
    """Derive a fresh secret scalar from 32 bytes of OS randomness."""
    return bls.KeyGen(secrets.token_bytes(32))


def secret_from_bytes(data: bytes) -> int:
    """Decode a big-endian 32-byte secret key, rejecting out-of-range scalars."""
    if len(data) != BLS_SECRET_KEY_LEN:
        raise InvalidSecretKeyError(
            f"secret key must be {BLS_SECRET_KEY_LEN} bytes, got {len(data)}"
        )
    secret = int.from_bytes(data, "big")
    if not 0 < secret < curve_order:
        raise InvalidSecretKeyError("secret key scalar is outside the curve order")
    return secret


def secret_to_pubkey(secret: int) -> BlsPublicKey:
    return bls.SkToPk(secret)


def compute_fork_data_root(fork_version: bytes, genesis_validators_root: bytes) -> bytes:
    return hash_tree_root_container(
        [hash_tree_root_bytes(fork_version), hash_tree_root_bytes(genesis_validators_root)]
    )


def compute_domain(
    domain_type: bytes,
    fork_version: bytes,
    genesis_validators_root: bytes = GENESIS_VALIDATORS_ROOT,
) -> bytes:
    """32-byte domain: the 4-byte type followed by 28 bytes of fork data root."""
    if len(domain_type) != 4 or len(fork_version) != 4:
        raise ValueError("domain type and fork version must be 4 bytes each")
    fork_data_root = compute_fork_data_root(fork_version, genesis_validators_root)
    return domain_type + fork_data_root[:28]


def compute_signing_root(object_root: bytes, domain: bytes) -> bytes:
    """Root of ``SigningData{object_root, domain}``."""
    return hash_tree_root_container([object_root, domain])


def sign_builder_message(chain: Chain, secret: int, message: ObjectTreeHash) -> BlsSignature:
    signing_root = compute_signing_root(message.tree_hash_root(), chain.builder_domain())
    return bls.Sign(secret, signing_root)


def verify_signed_builder_message(
    chain: Chain,
    pubkey: BlsPublicKey,
    message: ObjectTreeHash,
    signature: BlsSignature,
) -> bool:
    """Check *signature* by *pubkey* over *message* under the builder domain of *chain*."""
    signing_root = compute_signing_root(message.tree_hash_root(), chain.builder_domain())
    try:
        return bool(bls.Verify(pubkey, signing_root, signature))
    except (ValueError, TypeError, AssertionError):
        return False


__all__ = [
    "DOMAIN_APPLICATION_BUILDER",
    "GENESIS_VALIDATORS_ROOT",
    "compute_domain",
    "compute_fork_data_root",
    "compute_signing_root",
    "random_secret",
    "secret_from_bytes",
    "secret_to_pubkey",
    "sign_builder_message",
    "verify_signed_builder_message",
]
