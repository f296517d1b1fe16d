from __future__ import annotations

from cbsigner.models.chain import Chain
from cbsigner.models.delegation import ProxyDelegation, SignedProxyDelegation

__all__ = [
    "Chain",
    "ProxyDelegation",
    "SignedProxyDelegation",
]
