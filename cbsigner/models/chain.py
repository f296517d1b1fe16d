from __future__ import annotations

from enum import StrEnum
from functools import cache

from cbsigner.crypto.signature import DOMAIN_APPLICATION_BUILDER, compute_domain

_GENESIS_FORK_VERSIONS: dict[str, bytes] = {
    "mainnet": bytes.fromhex("00000000"),
    "holesky": bytes.fromhex("01017000"),
    "sepolia": bytes.fromhex("90000069"),
    "helder": bytes.fromhex("10000000"),
}


class Chain(StrEnum):
    """Network whose genesis fork version selects the signing domain."""

    mainnet = "mainnet"
    holesky = "holesky"
    sepolia = "sepolia"
    helder = "helder"

    @classmethod
    def _missing_(cls, value: object) -> Chain | None:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None

    @property
    def genesis_fork_version(self) -> bytes:
        return _GENESIS_FORK_VERSIONS[self.value]

    def builder_domain(self) -> bytes:
        return _builder_domain(self.genesis_fork_version)


@cache
def _builder_domain(fork_version: bytes) -> bytes:
    return compute_domain(DOMAIN_APPLICATION_BUILDER, fork_version)


__all__ = ["Chain"]
