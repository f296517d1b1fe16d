from __future__ import annotations

import pytest
from cbsigner.core.manager import SigningManager
from cbsigner.core.signer import Signer
from cbsigner.models.chain import Chain

from tests.helpers import SlotCommitment, secret_bytes


@pytest.fixture
def chain() -> Chain:
    return Chain.holesky


@pytest.fixture
def consensus_signer() -> Signer:
    return Signer.new_from_bytes(secret_bytes(0x1234_5678_9ABC_DEF0))


@pytest.fixture
def manager(chain: Chain, consensus_signer: Signer) -> SigningManager:
    signing_manager = SigningManager(chain)
    signing_manager.add_consensus_signer(consensus_signer)
    return signing_manager


@pytest.fixture
def commitment() -> SlotCommitment:
    return SlotCommitment(slot=9_000_001, payload_root=b"\xab" * 32)
