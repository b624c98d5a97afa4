import logging
from abc import ABC, abstractmethod

from keycore.crypto.random import SecureRandom, default_random
from keycore.errors import MalformedFormatError, WrongFormatTypeError
from keycore.keys import messages
from keycore.keys.messages import (
    AesGcmSivKey, AesGcmSivKeyFormat, KeyData, KeyMaterialType, Message,
)
from keycore.keys.validation import validate_aes_key_size

logger = logging.getLogger(__name__)


class KeyFactory(ABC):
    """Generates new keys of one key type from a key format."""

    @abstractmethod
    def get_key_type(self) -> str:
        """Type URL of the keys this factory produces."""

    @abstractmethod
    def new_key(self, key_format) -> Message:
        """Return a new key for a decoded or serialized key format."""

    @abstractmethod
    def new_key_data(self, serialized_key_format: bytes) -> KeyData:
        """Return a new key wrapped in a KeyData envelope."""


class AesGcmSivKeyFactory(KeyFactory):
    """Creates AesGcmSivKey records with fresh random key bytes.

    The random source is injected so tests can make key bytes
    deterministic; production uses the process-wide SecureRandom.
    """

    VERSION = 0

    def __init__(self, rand: SecureRandom | None = None):
        self._rand = rand if rand is not None else default_random()

    def get_key_type(self) -> str:
        return AesGcmSivKey.type_url()

    def new_key(self, key_format) -> AesGcmSivKey:
        if isinstance(key_format, (bytes, bytearray, memoryview)):
            key_format = self._parse_format(key_format)
        if not isinstance(key_format, AesGcmSivKeyFormat):
            name = getattr(key_format, "TYPE_NAME", "") or type(key_format).__name__
            logger.warning("Rejected key format of type %s", name)
            raise WrongFormatTypeError(
                f"Key format '{name}' is not supported by this manager.")

        validate_aes_key_size(key_format.key_size)
        logger.debug("Generating %d-byte AES-GCM-SIV key", key_format.key_size)
        return AesGcmSivKey(
            version=self.VERSION,
            key_value=self._rand.get_bytes(key_format.key_size))

    def new_key_data(self, serialized_key_format: bytes) -> KeyData:
        key = self.new_key(serialized_key_format)
        return KeyData(
            type_url=self.get_key_type(),
            value=messages.encode(key),
            key_material_type=KeyMaterialType.SYMMETRIC)

    @staticmethod
    def _parse_format(data) -> AesGcmSivKeyFormat:
        try:
            return messages.decode(AesGcmSivKeyFormat, data)
        except messages.DecodeError as e:
            raise MalformedFormatError(
                "Invalid key format: could not parse the passed string as proto "
                f"'{AesGcmSivKeyFormat.TYPE_NAME}'.") from e
