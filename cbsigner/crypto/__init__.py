"""BLS signing over SSZ-style signing roots."""

from cbsigner.crypto.signature import (
    DOMAIN_APPLICATION_BUILDER,
    compute_domain,
    compute_signing_root,
    random_secret,
    secret_from_bytes,
    sign_builder_message,
    verify_signed_builder_message,
)
from cbsigner.crypto.tree_hash import (
    hash_tree_root_bytes,
    hash_tree_root_container,
    merkleize_chunks,
)

__all__ = [
    "DOMAIN_APPLICATION_BUILDER",
    "compute_domain",
    "compute_signing_root",
    "hash_tree_root_bytes",
    "hash_tree_root_container",
    "merkleize_chunks",
    "random_secret",
    "secret_from_bytes",
    "sign_builder_message",
    "verify_signed_builder_message",
]
