import os
import threading

_default = None
_default_lock = threading.Lock()


class SecureRandom:
    """Source of key bytes for the key factories.

    Each call is an independent draw from the OS CSPRNG, so one instance
    can be shared by any number of threads.
    """

    def get_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError(f"Cannot draw a negative number of bytes: {n}")
        return os.urandom(n)


def default_random() -> SecureRandom:
    """Return the process-wide SecureRandom, creating it on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = SecureRandom()
    return _default
