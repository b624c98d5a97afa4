"""Key records and their serialized form.

Records are frozen dataclasses decoded once from bytes into values the
caller owns. The wire form is a JSON object with base64 bytes fields,
matching how wrapped keys are stored elsewhere in the library. Absent
fields decode to their defaults (0 / empty), unknown fields are rejected.
"""

import base64
import binascii
import enum
import json
from dataclasses import dataclass, fields

KEY_TYPE_PREFIX = "type.googleapis.com/"

_UINT32_MAX = 2 ** 32 - 1


class DecodeError(ValueError):
    """Bytes are not a valid serialization of the requested record."""


class KeyMaterialType(enum.IntEnum):
    UNKNOWN_KEYMATERIAL = 0
    SYMMETRIC = 1
    ASYMMETRIC_PRIVATE = 2
    ASYMMETRIC_PUBLIC = 3
    REMOTE = 4


class Message:
    """Base for serializable key and key-format records."""
    TYPE_NAME = ""

    @classmethod
    def type_url(cls) -> str:
        return KEY_TYPE_PREFIX + cls.TYPE_NAME


@dataclass(frozen=True)
class AesGcmSivKey(Message):
    TYPE_NAME = "google.crypto.tink.AesGcmSivKey"

    version: int = 0
    key_value: bytes = b""


@dataclass(frozen=True)
class AesGcmSivKeyFormat(Message):
    TYPE_NAME = "google.crypto.tink.AesGcmSivKeyFormat"

    key_size: int = 0


@dataclass(frozen=True)
class AesEaxKey(Message):
    TYPE_NAME = "google.crypto.tink.AesEaxKey"

    version: int = 0
    iv_size: int = 0
    key_value: bytes = b""


@dataclass(frozen=True)
class AesEaxKeyFormat(Message):
    TYPE_NAME = "google.crypto.tink.AesEaxKeyFormat"

    key_size: int = 0
    iv_size: int = 0


@dataclass(frozen=True)
class KeyData:
    """Envelope pairing a key type URL with a serialized key."""
    type_url: str
    value: bytes
    key_material_type: KeyMaterialType = KeyMaterialType.UNKNOWN_KEYMATERIAL

    def __post_init__(self):
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(f"KeyData.value must be bytes, got {type(self.value).__name__}")
        # Own a private copy so later writes to the caller's buffer are not seen.
        object.__setattr__(self, "value", bytes(self.value))


def encode(message: Message) -> bytes:
    """Serialize a record to its JSON wire form."""
    payload = {}
    for f in fields(message):
        value = getattr(message, f.name)
        if f.type is bytes:
            value = base64.b64encode(value).decode("ascii")
        payload[f.name] = value
    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")


def _decode_field(f, raw):
    if f.type is bytes:
        if not isinstance(raw, str):
            raise DecodeError(f"field '{f.name}' must be a base64 string")
        try:
            value = base64.b64decode(raw.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise DecodeError(f"field '{f.name}' is not valid base64") from e
        # Unused padding bits must be zero; one encoding per value
        if base64.b64encode(value).decode("ascii") != raw:
            raise DecodeError(f"field '{f.name}' is not canonical base64")
        return value
    # bool is an int subclass; a JSON true is not a valid version or size
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise DecodeError(f"field '{f.name}' must be an integer")
    if raw < 0 or raw > _UINT32_MAX:
        raise DecodeError(f"field '{f.name}' out of range: {raw}")
    return raw


def decode(cls, data: bytes):
    """Parse ``data`` as an instance of record class ``cls``."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError(f"expected bytes, got {type(data).__name__}")
    # ValueError covers JSONDecodeError, UnicodeDecodeError and oversized
    # integer literals; RecursionError comes from deeply nested arrays
    try:
        payload = json.loads(bytes(data).decode("utf-8"))
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"not a serialized {cls.TYPE_NAME}") from e
    if not isinstance(payload, dict):
        raise DecodeError(f"not a serialized {cls.TYPE_NAME}")

    known = {f.name: f for f in fields(cls)}
    unknown = sorted(set(payload) - set(known))
    if unknown:
        raise DecodeError(f"unknown fields for {cls.TYPE_NAME}: {', '.join(unknown)}")
    values = {name: _decode_field(known[name], raw) for name, raw in payload.items()}
    return cls(**values)
