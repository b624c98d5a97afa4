from keycore.errors import BadKeySizeError, BadVersionError


def validate_version(candidate: int, expected: int):
    """Reject any key version other than the one the manager supports."""
    if candidate != expected:
        raise BadVersionError(
            f"Key version {candidate} is not supported; this manager only "
            f"accepts version {expected}.")


def validate_aes_key_size(size: int, supported_sizes=(16, 32)):
    """Reject AES key sizes outside the supported set."""
    if size not in supported_sizes:
        sizes = " or ".join(str(s) for s in supported_sizes)
        raise BadKeySizeError(
            f"Invalid key size: {size} bytes; supported sizes: {sizes} bytes.")
