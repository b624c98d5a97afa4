import logging
from abc import ABC, abstractmethod

from keycore.crypto.engine import AesGcmSiv
from keycore.crypto.random import SecureRandom
from keycore.errors import InvalidArgumentError, MalformedKeyError, WrongKeyTypeError
from keycore.keys import messages
from keycore.keys.factory import AesGcmSivKeyFactory, KeyFactory
from keycore.keys.messages import AesGcmSivKey, KeyData
from keycore.keys.validation import validate_aes_key_size, validate_version

logger = logging.getLogger(__name__)


class KeyManager(ABC):
    """Turns key material of a single key type into a primitive.

    A registry keeps one manager per type URL and calls get_primitive()
    on the manager whose does_support() matches.
    """

    @abstractmethod
    def get_key_type(self) -> str:
        """Type URL claimed by this manager."""

    @abstractmethod
    def get_version(self) -> int:
        """Key version this manager accepts."""

    @abstractmethod
    def get_key_factory(self) -> KeyFactory:
        """Factory producing new keys of this manager's type."""

    @abstractmethod
    def get_primitive(self, key):
        """Return a primitive for a KeyData envelope or a decoded key."""

    def does_support(self, key_type: str) -> bool:
        return key_type == self.get_key_type()


class AesGcmSivKeyManager(KeyManager):
    """Key manager for AES-GCM-SIV keys (16 or 32 byte AES keys)."""

    VERSION = 0

    def __init__(self, rand: SecureRandom | None = None):
        self._key_factory = AesGcmSivKeyFactory(rand)

    def get_key_type(self) -> str:
        return AesGcmSivKey.type_url()

    def get_version(self) -> int:
        return self.VERSION

    def get_key_factory(self) -> AesGcmSivKeyFactory:
        return self._key_factory

    def get_primitive(self, key) -> AesGcmSiv:
        if isinstance(key, KeyData):
            key = self._parse_key_data(key)
        if not isinstance(key, AesGcmSivKey):
            name = getattr(key, "TYPE_NAME", "") or type(key).__name__
            logger.warning("Rejected key of type %s", name)
            raise WrongKeyTypeError(
                f"Key type '{name}' is not supported by this manager.")

        self._validate_key(key)
        return AesGcmSiv(key.key_value)

    def _parse_key_data(self, key_data: KeyData) -> AesGcmSivKey:
        if not self.does_support(key_data.type_url):
            logger.warning("Rejected key data of type %s", key_data.type_url)
            raise WrongKeyTypeError(
                f"Key type '{key_data.type_url}' is not supported by this manager.")
        try:
            return messages.decode(AesGcmSivKey, key_data.value)
        except messages.DecodeError as e:
            raise MalformedKeyError(
                "Invalid key_data.value: could not parse it as key type "
                f"'{self.get_key_type()}'.") from e

    def _validate_key(self, key: AesGcmSivKey):
        try:
            validate_version(key.version, self.get_version())
            validate_aes_key_size(len(key.key_value))
        except InvalidArgumentError as e:
            logger.warning("Invalid AES-GCM-SIV key: %s", e,
                           extra={"key_type": self.get_key_type(), "error_kind": e.kind})
            raise
