import os
import logging

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives.ciphers.aead import AESGCMSIV

from keycore.errors import ConstructionError, DecryptionError

logger = logging.getLogger(__name__)

# Ciphertext layout: NONCE (12 bytes) || AES-GCM-SIV output (ciphertext || TAG)
NONCE_SIZE = 12
TAG_SIZE = 16


def _as_bytes(value, name: str) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes, got {type(value).__name__}")


class AesGcmSiv:
    """AEAD primitive over AES-GCM-SIV (RFC 8452).

    Built by AesGcmSivKeyManager from validated key bytes. A fresh random
    nonce is drawn for every encryption and prepended to the output.
    """

    def __init__(self, key_value: bytes):
        key = _as_bytes(key_value, "key_value")
        try:
            self._aead = AESGCMSIV(key)
        except (ValueError, UnsupportedAlgorithm) as e:
            raise ConstructionError(
                f"AES-GCM-SIV rejected a {len(key)}-byte key: {e}") from e

    def encrypt(self, plaintext: bytes, associated_data: bytes) -> bytes:
        """Encrypt and authenticate plaintext, binding associated_data."""
        plaintext = _as_bytes(plaintext, "plaintext")
        associated_data = _as_bytes(associated_data, "associated_data")
        nonce = os.urandom(NONCE_SIZE)
        return nonce + self._aead.encrypt(nonce, plaintext, associated_data)

    def decrypt(self, ciphertext: bytes, associated_data: bytes) -> bytes:
        """Verify and decrypt output of encrypt(); raises DecryptionError."""
        ciphertext = _as_bytes(ciphertext, "ciphertext")
        associated_data = _as_bytes(associated_data, "associated_data")
        if len(ciphertext) < NONCE_SIZE + TAG_SIZE:
            raise DecryptionError(
                f"Ciphertext too short: {len(ciphertext)} bytes")
        nonce, body = ciphertext[:NONCE_SIZE], ciphertext[NONCE_SIZE:]
        try:
            return self._aead.decrypt(nonce, body, associated_data)
        except InvalidTag as e:
            logger.warning("AES-GCM-SIV authentication failed")
            raise DecryptionError("Decryption failed: authentication tag mismatch") from e
