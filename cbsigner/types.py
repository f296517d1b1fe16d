"""Fixed-size BLS wire values and their pydantic field types."""

from __future__ import annotations

from typing import Annotated

from eth_typing import BLSPubkey, BLSSignature
from pydantic import PlainSerializer, PlainValidator

from cbsigner.errors import InvalidPubkeyError

BLS_PUBKEY_LEN = 48
BLS_SIGNATURE_LEN = 96
BLS_SECRET_KEY_LEN = 32

BlsPublicKey = BLSPubkey
BlsSignature = BLSSignature


def to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def from_hex(value: str) -> bytes:
    """Decode a hex string, with or without the ``0x`` prefix."""
    hex_content = value[2:] if value.startswith(("0x", "0X")) else value
    try:
        return bytes.fromhex(hex_content)
    except ValueError as exc:
        raise ValueError(f"invalid hex string: {value[:12]}...") from exc


def short_hex(data: bytes) -> str:
    """Abbreviated hex for log lines, e.g. ``0xa1b2c3d4..e5f6``."""
    full = data.hex()
    return f"0x{full[:8]}..{full[-4:]}"


def _fixed_bytes_validator(length: int):
    def _validate(value: str | bytes) -> bytes:
        if isinstance(value, str):
            value = from_hex(value)
        if not isinstance(value, bytes | bytearray):
            raise ValueError(f"expected bytes or hex string, got {type(value).__name__}")
        if len(value) != length:
            raise ValueError(f"expected {length} bytes, got {len(value)}")
        return bytes(value)

    return _validate


_validate_pubkey = _fixed_bytes_validator(BLS_PUBKEY_LEN)


def to_pubkey(value: str | bytes | bytearray) -> BlsPublicKey:
    """Normalize a pubkey given as bytes, bytearray or hex into 48 immutable bytes."""
    try:
        return BlsPublicKey(_validate_pubkey(value))
    except ValueError as exc:
        raise InvalidPubkeyError(str(exc)) from exc


PubkeyField = Annotated[
    bytes,
    PlainValidator(_validate_pubkey),
    PlainSerializer(to_hex, return_type=str, when_used="json"),
]

SignatureField = Annotated[
    bytes,
    PlainValidator(_fixed_bytes_validator(BLS_SIGNATURE_LEN)),
    PlainSerializer(to_hex, return_type=str, when_used="json"),
]


__all__ = [
    "BLS_PUBKEY_LEN",
    "BLS_SECRET_KEY_LEN",
    "BLS_SIGNATURE_LEN",
    "BlsPublicKey",
    "BlsSignature",
    "PubkeyField",
    "SignatureField",
    "from_hex",
    "short_hex",
    "to_hex",
    "to_pubkey",
]
