"""Tests for inkvault.core.crypto."""

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from inkvault.core.crypto import (
    DEFAULT_ITERATIONS,
    HEADER_SIZE,
    NONCE_SIZE,
    SALT_SIZE,
    TAG_SIZE,
    EncryptedBlob,
    EncryptionCodec,
)
from inkvault.core.exceptions import DECRYPT_FAILED_MESSAGE, AuthenticationFailedError


class TestRoundTrip:
    @pytest.mark.parametrize(
        "plaintext",
        [b"", b"x", b"hello world", "📅 1403-01-01  🗓️ Wednesday".encode(), bytes(range(256)) * 4],
    )
    def test_bytes(self, codec, plaintext):
        assert codec.decrypt(codec.encrypt(plaintext, "pw"), "pw") == plaintext

    def test_str_is_utf8_encoded(self, codec):
        blob = codec.encrypt("سلام", "pw")
        assert codec.decrypt(blob, "pw") == "سلام".encode()
        assert codec.decrypt_text(blob, "pw") == "سلام"

    def test_empty_password(self, codec):
        assert codec.decrypt(codec.encrypt(b"data", ""), "") == b"data"

    def test_default_iterations(self):
        codec = EncryptionCodec()
        assert codec.iterations == DEFAULT_ITERATIONS == 350_000
        assert codec.decrypt(codec.encrypt(b"slow but sure", "pw"), "pw") == b"slow but sure"

    def test_rejects_non_positive_iterations(self):
        with pytest.raises(ValueError):
            EncryptionCodec(iterations=0)


class TestLayout:
    def test_length(self, codec):
        assert HEADER_SIZE == 44
        assert len(codec.encrypt(b"", "pw")) == 44
        assert len(codec.encrypt(b"12345", "pw")) == 49

    def test_fields_in_order(self, codec):
        """salt | nonce | tag | ciphertext, readable with plain AES-GCM."""
        blob = codec.encrypt(b"layout check", "pw")
        salt = blob[:SALT_SIZE]
        nonce = blob[SALT_SIZE : SALT_SIZE + NONCE_SIZE]
        tag = blob[SALT_SIZE + NONCE_SIZE : SALT_SIZE + NONCE_SIZE + TAG_SIZE]
        ciphertext = blob[HEADER_SIZE:]

        key = bytes(codec.derive_key("pw", salt))
        assert AESGCM(key).decrypt(nonce, ciphertext + tag, None) == b"layout check"

    def test_blob_roundtrip(self, codec):
        raw = codec.encrypt(b"abc", "pw")
        parsed = EncryptedBlob.from_bytes(raw)
        assert len(parsed.salt) == 16
        assert len(parsed.nonce) == 12
        assert len(parsed.tag) == 16
        assert len(parsed.ciphertext) == 3
        assert parsed.to_bytes() == raw

    def test_from_bytes_too_short(self):
        with pytest.raises(AuthenticationFailedError):
            EncryptedBlob.from_bytes(b"\x00" * 43)


class TestFreshness:
    def test_identical_inputs_give_different_blobs(self, codec):
        a = codec.encrypt(b"same", "pw")
        b = codec.encrypt(b"same", "pw")
        assert a != b
        assert a[:SALT_SIZE] != b[:SALT_SIZE]
        assert a[SALT_SIZE : SALT_SIZE + NONCE_SIZE] != b[SALT_SIZE : SALT_SIZE + NONCE_SIZE]


class TestFailures:
    def test_wrong_password(self, codec):
        blob = codec.encrypt(b"secret", "right")
        with pytest.raises(AuthenticationFailedError) as exc_info:
            codec.decrypt(blob, "wrong")
        assert str(exc_info.value) == DECRYPT_FAILED_MESSAGE

    def test_any_flipped_byte_is_detected(self, codec):
        blob = codec.encrypt(b"tamper me", "pw")
        for i in range(len(blob)):
            corrupted = bytearray(blob)
            corrupted[i] ^= 0x01
            with pytest.raises(AuthenticationFailedError):
                codec.decrypt(bytes(corrupted), "pw")

    def test_truncated_blob(self, codec):
        blob = codec.encrypt(b"abc", "pw")
        with pytest.raises(AuthenticationFailedError):
            codec.decrypt(blob[:-1], "pw")

    @pytest.mark.parametrize("size", [0, 1, 28, 43])
    def test_short_blob_skips_key_derivation(self, codec, monkeypatch, size):
        calls = []
        monkeypatch.setattr(codec, "derive_key", lambda *args: calls.append(args))
        with pytest.raises(AuthenticationFailedError):
            codec.decrypt(b"\x01" * size, "pw")
        assert calls == []

    def test_non_utf8_plaintext(self, codec):
        blob = codec.encrypt(b"\xff\xfe\xfd", "pw")
        assert codec.decrypt(blob, "pw") == b"\xff\xfe\xfd"
        with pytest.raises(AuthenticationFailedError):
            codec.decrypt_text(blob, "pw")

    def test_iteration_count_must_match(self, codec):
        blob = codec.encrypt(b"data", "pw")
        other = EncryptionCodec(iterations=codec.iterations + 1)
        with pytest.raises(AuthenticationFailedError):
            other.decrypt(blob, "pw")
