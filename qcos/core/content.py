"""Normalization of whole-file upload content to bytes.

Accepted content is one of:

* bytes-like objects (``bytes``, ``bytearray``, ``memoryview``), sent as is;
* a filesystem path (``str`` or ``os.PathLike``), whose file is read;
* a readable binary stream, read to its end.

To upload a string literally, encode it first.
"""

import os
from functools import singledispatch
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from qcos.core.exceptions import NoContentError, UnsupportedContentError

Content = Union[bytes, bytearray, memoryview, str, os.PathLike, BinaryIO]


@singledispatch
def _to_bytes(content: Any) -> Optional[bytes]:
    read = getattr(content, "read", None)
    if callable(read):
        data = read()
        if isinstance(data, str):
            raise UnsupportedContentError("streams must be opened in binary mode")
        return None if data is None else bytes(data)
    if isinstance(content, os.PathLike):
        return Path(content).read_bytes()
    raise UnsupportedContentError(
        f"unsupported content type: {type(content).__name__}"
    )


@_to_bytes.register(bytes)
@_to_bytes.register(bytearray)
@_to_bytes.register(memoryview)
def _(content: Union[bytes, bytearray, memoryview]) -> bytes:
    return bytes(content)


@_to_bytes.register(str)
def _(content: str) -> bytes:
    return Path(content).read_bytes()


def read_content(content: Content) -> bytes:
    """Resolve upload content to the bytes to send.

    Args:
        content: Bytes-like object, path, or binary stream.

    Returns:
        The content bytes.

    Raises:
        UnsupportedContentError: If the content type is not supported.
        NoContentError: If the content resolves to ``None``.
        OSError: If a path cannot be read.
    """
    if content is None:
        raise NoContentError("no content")
    data = _to_bytes(content)
    if data is None:
        raise NoContentError("no content")
    return data
