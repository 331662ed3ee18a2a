"""Handshake timestamps sealed to the server's X25519 key."""

from __future__ import annotations

import hashlib
import secrets
from typing import Optional

from nacl import bindings
from nacl.exceptions import CryptoError

from .tai64n import TIMESTAMP_SIZE, Timestamp
from .tai64n import now as tai64n_now

VERSION = 1
LABEL = b"ts-encrypt"
KEY_SIZE = 32
PUBLIC_KEY_SIZE = 32
NONCE_SIZE = 24
TAG_SIZE = 16
HEADER_SIZE = 1 + PUBLIC_KEY_SIZE + NONCE_SIZE
PAYLOAD_SIZE = HEADER_SIZE + TAG_SIZE + TIMESTAMP_SIZE


class TimestampDecryptError(ValueError):
    """Raised when an encrypted timestamp payload fails to open."""


def _key(value: bytes, what: str) -> bytes:
    raw = bytes(value)
    if len(raw) != KEY_SIZE:
        raise ValueError(f"{what} must be {KEY_SIZE} bytes, got {len(raw)}")
    return raw


def derive_public_key(private_key: bytes) -> bytes:
    """Return the X25519 public key for a 32-byte private key."""
    priv = _key(private_key, "private key")
    try:
        return bindings.crypto_scalarmult_base(priv)
    except CryptoError as exc:
        raise ValueError(f"derive public key: {exc}") from exc


def derive_encrypted_timestamp_key(shared: bytes) -> bytes:
    """Derive the AEAD key from an X25519 shared secret."""
    return hashlib.blake2s(LABEL + bytes(shared), digest_size=32).digest()


def build_encrypted_timestamp_payload(server_pub: bytes) -> bytes:
    """Seal the current TAI64N time to the server public key."""
    server_key = _key(server_pub, "server public key")
    client_priv = secrets.token_bytes(KEY_SIZE)
    client_pub = derive_public_key(client_priv)
    try:
        shared = bindings.crypto_scalarmult(client_priv, server_key)
    except CryptoError as exc:
        raise ValueError(f"key agreement failed: {exc}") from exc
    key = derive_encrypted_timestamp_key(shared)
    nonce = secrets.token_bytes(NONCE_SIZE)
    ciphertext = bindings.crypto_aead_xchacha20poly1305_ietf_encrypt(
        bytes(tai64n_now()), None, nonce, key
    )
    return bytes([VERSION]) + client_pub + nonce + ciphertext


def parse_encrypted_timestamp_payload(payload: bytes, server_priv: bytes) -> Optional[Timestamp]:
    """Open an encrypted timestamp.

    Returns None when the payload does not carry one; raises
    TimestampDecryptError when it does but cannot be opened.
    """
    data = bytes(payload)
    priv = _key(server_priv, "server private key")
    if len(data) < PAYLOAD_SIZE or data[0] != VERSION:
        return None
    client_pub = data[1 : 1 + PUBLIC_KEY_SIZE]
    nonce = data[1 + PUBLIC_KEY_SIZE : HEADER_SIZE]
    ciphertext = data[HEADER_SIZE:]
    try:
        shared = bindings.crypto_scalarmult(priv, client_pub)
        key = derive_encrypted_timestamp_key(shared)
        plaintext = bindings.crypto_aead_xchacha20poly1305_ietf_decrypt(ciphertext, None, nonce, key)
    except CryptoError as exc:
        raise TimestampDecryptError(f"encrypted timestamp decrypt failed: {exc}") from exc
    if len(plaintext) != TIMESTAMP_SIZE:
        raise TimestampDecryptError("invalid timestamp size")
    return Timestamp(plaintext)