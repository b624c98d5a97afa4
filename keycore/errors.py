"""Exceptions raised by the key managers and key factories.

Every rejection of caller-supplied material is an ``InvalidArgumentError``
(also a ``ValueError``); the subclass and its ``kind`` tell callers which
rule was violated. Messages always name the offending value.
"""


class KeyCoreError(Exception):
    """Base error for keycore."""


class InvalidArgumentError(KeyCoreError, ValueError):
    """Caller supplied a key, format or envelope that cannot be used."""
    kind = "invalid_argument"


class WrongKeyTypeError(InvalidArgumentError):
    """Key belongs to a schema this manager does not handle."""
    kind = "wrong_key_type"


class WrongFormatTypeError(InvalidArgumentError):
    """Key format belongs to a schema this factory does not handle."""
    kind = "wrong_format_type"


class MalformedKeyError(InvalidArgumentError):
    kind = "malformed_key"


class MalformedFormatError(InvalidArgumentError):
    kind = "malformed_format"


class BadVersionError(InvalidArgumentError):
    kind = "bad_version"


class BadKeySizeError(InvalidArgumentError):
    kind = "bad_key_size"


class ConstructionError(InvalidArgumentError):
    """The AEAD backend rejected key bytes that passed validation."""
    kind = "construction_failure"


class DecryptionError(KeyCoreError):
    """Ciphertext failed authentication or is too short to be valid."""
