import os
import pytest
from keycore.crypto.engine import AesGcmSiv, NONCE_SIZE, TAG_SIZE
from keycore.errors import ConstructionError, DecryptionError


@pytest.mark.parametrize("key_len", [16, 32])
def test_encrypt_decrypt_roundtrip(key_len):
    aead = AesGcmSiv(os.urandom(key_len))
    ct = aead.encrypt(b"some plaintext", b"some aad")
    assert len(ct) == NONCE_SIZE + len(b"some plaintext") + TAG_SIZE
    assert aead.decrypt(ct, b"some aad") == b"some plaintext"


def test_wrong_aad_raises():
    aead = AesGcmSiv(os.urandom(16))
    ct = aead.encrypt(b"some plaintext", b"some aad")
    with pytest.raises(DecryptionError):
        aead.decrypt(ct, b"different aad")


def test_wrong_key_raises():
    ct = AesGcmSiv(b"k" * 32).encrypt(b"some plaintext", b"")
    with pytest.raises(DecryptionError):
        AesGcmSiv(b"j" * 32).decrypt(ct, b"")


def test_tampered_ciphertext_raises():
    aead = AesGcmSiv(os.urandom(32))
    ct = bytearray(aead.encrypt(b"some plaintext", b"aad"))
    ct[-1] ^= 0x01
    with pytest.raises(DecryptionError):
        aead.decrypt(bytes(ct), b"aad")


def test_truncated_ciphertext_raises():
    aead = AesGcmSiv(os.urandom(16))
    with pytest.raises(DecryptionError, match="too short"):
        aead.decrypt(b"\x00" * (NONCE_SIZE + TAG_SIZE - 1), b"")


def test_fresh_nonce_per_encryption():
    aead = AesGcmSiv(os.urandom(16))
    assert aead.encrypt(b"same", b"aad") != aead.encrypt(b"same", b"aad")


def test_accepts_bytearray_and_memoryview():
    aead = AesGcmSiv(bytearray(b"k" * 16))
    ct = aead.encrypt(memoryview(b"payload"), bytearray(b"aad"))
    assert aead.decrypt(bytearray(ct), b"aad") == b"payload"


def test_rejects_non_bytes():
    aead = AesGcmSiv(b"k" * 16)
    with pytest.raises(TypeError):
        aead.encrypt("text", b"aad")


def test_key_buffer_is_copied():
    key = bytearray(b"k" * 16)
    aead = AesGcmSiv(key)
    ct = aead.encrypt(b"payload", b"")
    key[:] = b"x" * 16
    assert aead.decrypt(ct, b"") == b"payload"


def test_bad_key_length_is_construction_error():
    with pytest.raises(ConstructionError):
        AesGcmSiv(b"k" * 20)
