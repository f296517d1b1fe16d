"""Core module: signers and the signing registry."""

from cbsigner.core.manager import SigningManager
from cbsigner.core.signer import ProxySigner, Signer

__all__ = [
    "ProxySigner",
    "Signer",
    "SigningManager",
]
