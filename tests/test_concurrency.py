"""Concurrent access to a shared SigningManager.

Covers proxy creation and same-key signing, both on one event loop and
from several threads, plus readers polling while a writer registers keys.
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from cbsigner.core.manager import SigningManager
from cbsigner.core.signer import Signer
from cbsigner.crypto.signature import verify_signed_builder_message
from cbsigner.models.chain import Chain

from tests.helpers import SlotCommitment, secret_bytes


@pytest.mark.asyncio
async def test_parallel_create_proxy_yields_distinct_entries(
    manager: SigningManager,
    consensus_signer: Signer,
) -> None:
    delegator = consensus_signer.pubkey()

    delegations = await asyncio.gather(*(manager.create_proxy(delegator) for _ in range(4)))

    proxies = {d.message.proxy for d in delegations}
    assert len(proxies) == 4
    assert set(manager.proxy_pubkeys()) == proxies
    for delegation in delegations:
        assert manager.get_delegation(delegation.message.proxy) == delegation


@pytest.mark.asyncio
async def test_parallel_signing_with_different_keys(
    manager: SigningManager,
    consensus_signer: Signer,
    chain: Chain,
) -> None:
    first = await manager.create_proxy(consensus_signer.pubkey())
    second = await manager.create_proxy(consensus_signer.pubkey())
    message = SlotCommitment(slot=3, payload_root=b"\x03" * 32)

    sig_a, sig_b, sig_c = await asyncio.gather(
        manager.sign_proxy(first.message.proxy, message),
        manager.sign_proxy(second.message.proxy, message),
        manager.sign_consensus(consensus_signer.pubkey(), message),
    )

    assert len({sig_a, sig_b, sig_c}) == 3
    assert sig_c == await consensus_signer.sign(chain, message)


def test_create_proxy_from_threads(manager: SigningManager, consensus_signer: Signer) -> None:
    delegator = consensus_signer.pubkey()

    def _mint() -> bytes:
        delegation = asyncio.run(manager.create_proxy(delegator))
        return delegation.message.proxy

    with ThreadPoolExecutor(max_workers=3) as pool:
        minted = list(pool.map(lambda _: _mint(), range(3)))

    assert len(set(minted)) == 3
    assert sorted(manager.proxy_pubkeys()) == sorted(minted)
    assert len(manager.delegations()) == 3


def test_readers_see_only_complete_entries() -> None:
    manager = SigningManager(Chain.mainnet)
    signers = [Signer.new_from_bytes(secret_bytes(1000 + n)) for n in range(6)]
    known = {signer.pubkey() for signer in signers}
    stop = threading.Event()
    observed_sizes: list[int] = []
    errors: list[str] = []

    def _reader() -> None:
        while not stop.is_set():
            snapshot = manager.consensus_pubkeys()
            observed_sizes.append(len(snapshot))
            for pubkey in snapshot:
                if pubkey not in known or not manager.has_consensus(pubkey):
                    errors.append(pubkey.hex())

    reader = threading.Thread(target=_reader)
    reader.start()
    try:
        for signer in signers:
            manager.add_consensus_signer(signer)
    finally:
        stop.set()
        reader.join()

    assert errors == []
    assert observed_sizes == sorted(observed_sizes)
    assert set(manager.consensus_pubkeys()) == known


@pytest.mark.asyncio
async def test_same_proxy_signed_concurrently_on_one_loop(
    manager: SigningManager,
    consensus_signer: Signer,
    chain: Chain,
) -> None:
    proxy = (await manager.create_proxy(consensus_signer.pubkey())).message.proxy
    message = SlotCommitment(slot=9, payload_root=b"\x09" * 32)

    signatures = await asyncio.gather(*(manager.sign_proxy(proxy, message) for _ in range(8)))

    assert len(set(signatures)) == 1
    assert verify_signed_builder_message(chain, proxy, message, signatures[0])


def test_same_proxy_signed_from_threads(
    manager: SigningManager,
    consensus_signer: Signer,
    chain: Chain,
) -> None:
    proxy = asyncio.run(manager.create_proxy(consensus_signer.pubkey())).message.proxy
    message = SlotCommitment(slot=10, payload_root=b"\x0a" * 32)

    with ThreadPoolExecutor(max_workers=4) as pool:
        signatures = list(
            pool.map(lambda _: asyncio.run(manager.sign_proxy(proxy, message)), range(8))
        )

    assert len(set(signatures)) == 1
    assert verify_signed_builder_message(chain, proxy, message, signatures[0])
