"""
Authenticated encryption for journal entries.

Each blob is self-contained: a fresh salt and nonce are generated per call and
stored in front of the ciphertext, so every entry can be decrypted with nothing
but the password.

Layout (no header, no version byte):
    salt (16) | nonce (12) | tag (16) | ciphertext (len(plaintext))

Key derivation is PBKDF2-HMAC-SHA512 with 350,000 iterations, producing a
256-bit AES-GCM key. Keys are derived per call and never cached.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from loguru import logger

from .exceptions import AuthenticationFailedError

SALT_SIZE = 16
NONCE_SIZE = 12
TAG_SIZE = 16
KEY_SIZE = 32
HEADER_SIZE = SALT_SIZE + NONCE_SIZE + TAG_SIZE
DEFAULT_ITERATIONS = 350_000


def _wipe(buffer: bytearray) -> None:
    """Best-effort zeroing of a mutable secret buffer."""
    for i in range(len(buffer)):
        buffer[i] = 0


@dataclass(frozen=True)
class EncryptedBlob:
    """Parsed view of an on-disk entry."""

    salt: bytes
    nonce: bytes
    tag: bytes
    ciphertext: bytes

    def to_bytes(self) -> bytes:
        return self.salt + self.nonce + self.tag + self.ciphertext

    @classmethod
    def from_bytes(cls, data: bytes) -> EncryptedBlob:
        """Split a blob into its fields.

        Raises:
            AuthenticationFailedError: ``data`` is shorter than the fixed header.
        """
        if data is None or len(data) < HEADER_SIZE:
            raise AuthenticationFailedError()
        return cls(
            salt=bytes(data[:SALT_SIZE]),
            nonce=bytes(data[SALT_SIZE : SALT_SIZE + NONCE_SIZE]),
            tag=bytes(data[SALT_SIZE + NONCE_SIZE : HEADER_SIZE]),
            ciphertext=bytes(data[HEADER_SIZE:]),
        )


class EncryptionCodec:
    """Password-based AES-256-GCM codec.

    Stateless apart from the KDF iteration count, which must match between
    the codec that wrote a blob and the one reading it. Lower counts are only
    meant for tests.
    """

    def __init__(self, iterations: int = DEFAULT_ITERATIONS):
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self.iterations = iterations

    def derive_key(self, password: str, salt: bytes) -> bytearray:
        """Derive a fresh 256-bit key. The caller wipes the returned buffer."""
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA512(),
            length=KEY_SIZE,
            salt=salt,
            iterations=self.iterations,
        )
        return bytearray(kdf.derive(password.encode("utf-8")))

    def encrypt(self, plaintext: bytes | str, password: str) -> bytes:
        """Encrypt ``plaintext`` under ``password`` into a standalone blob."""
        if isinstance(plaintext, str):
            plain = bytearray(plaintext.encode("utf-8"))
        else:
            plain = bytearray(plaintext)

        salt = os.urandom(SALT_SIZE)
        key = self.derive_key(password, salt)
        nonce = os.urandom(NONCE_SIZE)
        try:
            sealed = AESGCM(key).encrypt(nonce, plain, None)
        finally:
            _wipe(key)
            _wipe(plain)

        # AESGCM appends the tag; the file format stores it before the ciphertext
        ciphertext, tag = sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]
        return EncryptedBlob(salt=salt, nonce=nonce, tag=tag, ciphertext=ciphertext).to_bytes()

    def decrypt(self, blob: bytes, password: str) -> bytes:
        """Verify and decrypt a blob.

        Raises:
            AuthenticationFailedError: The blob is too short, the password is
                wrong, or the data was modified. These cases are deliberately
                indistinguishable.
        """
        parsed = EncryptedBlob.from_bytes(blob)

        key = self.derive_key(password, parsed.salt)
        try:
            return AESGCM(key).decrypt(parsed.nonce, parsed.ciphertext + parsed.tag, None)
        except InvalidTag:
            logger.debug("Blob failed authentication")
            raise AuthenticationFailedError() from None
        finally:
            _wipe(key)

    def decrypt_text(self, blob: bytes, password: str) -> str:
        """Decrypt a blob and decode it as UTF-8."""
        plain = self.decrypt(blob, password)
        try:
            return plain.decode("utf-8")
        except UnicodeDecodeError:
            raise AuthenticationFailedError() from None
