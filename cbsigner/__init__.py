"""Consensus key custody and proxy-key delegation for validator signing."""

from cbsigner.core.manager import SigningManager
from cbsigner.core.signer import ProxySigner, Signer
from cbsigner.errors import (
    InvalidSecretKeyError,
    SignError,
    UnknownConsensusSigner,
    UnknownProxySigner,
)
from cbsigner.models.chain import Chain
from cbsigner.models.delegation import ProxyDelegation, SignedProxyDelegation

__all__ = [
    "Chain",
    "InvalidSecretKeyError",
    "ProxyDelegation",
    "ProxySigner",
    "SignError",
    "SignedProxyDelegation",
    "Signer",
    "SigningManager",
    "UnknownConsensusSigner",
    "UnknownProxySigner",
]
