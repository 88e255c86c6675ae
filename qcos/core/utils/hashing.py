"""SHA-1 digests in the upper-case hex form the server expects."""

import hashlib
from typing import BinaryIO

from qcos.core.const import HASH_READ_SIZE


def sha1_hex(data: bytes) -> str:
    """Return the upper-case hex SHA-1 of ``data``."""
    return hashlib.sha1(data).hexdigest().upper()


def sha1_hex_stream(stream: BinaryIO) -> str:
    """Return the upper-case hex SHA-1 of everything left in ``stream``."""
    digest = hashlib.sha1()
    for chunk in iter(lambda: stream.read(HASH_READ_SIZE), b""):
        digest.update(chunk)
    return digest.hexdigest().upper()
