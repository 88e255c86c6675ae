"""Bucket handles."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel

from qcos.core.directory import Directory
from qcos.core.transport import Method
from qcos.core.utils.paths import resource_path

if TYPE_CHECKING:
    from qcos.core.cos import Cos

ResultT = TypeVar("ResultT", bound=BaseModel)


class Bucket:
    """Top-level container of directories and files."""

    def __init__(self, cos: Cos, name: str) -> None:
        """Initialize the bucket handle.

        Args:
            cos: Client owning the bucket.
            name: Bucket name.
        """
        self._cos = cos
        self._name = name

    @property
    def cos(self) -> Cos:
        """Client owning the bucket."""
        return self._cos

    @property
    def name(self) -> str:
        """Bucket name."""
        return self._name

    def dir(self, name: str = "") -> Directory:
        """Return the handle of directory ``name``.

        Multi-level names such as ``"a/b"`` are supported. An empty name is
        the root of the bucket.
        """
        return Directory(self, name)

    def resource_path(self, path: str) -> str:
        """Return the resource path of an escaped path in this bucket."""
        return resource_path(self._cos.app_id, self._name, path)

    def url(self, path: str) -> str:
        """Return the URL of an escaped path in this bucket."""
        return self._cos.transport.url(self.resource_path(path))

    def sign(self, path: str, seconds: int) -> str:
        """Sign a request for an escaped path.

        Args:
            path: Escaped path in the bucket.
            seconds: Lifetime of a multi-use token. When not positive, a
                single-use token bound to the resource path is returned.
        """
        return self._cos.signer.sign_for(
            self._name, self.resource_path(path), seconds
        )

    def call(
        self,
        method: Method,
        path: str,
        auth: str,
        params: dict[str, str],
        result_type: type[ResultT] | None = None,
        multipart: bool = False,
        content: bytes | None = None,
    ) -> ResultT | None:
        """Send a signed call for an escaped path in this bucket."""
        return self._cos.transport.call(
            method,
            self.resource_path(path),
            auth,
            params,
            result_type=result_type,
            multipart=multipart,
            content=content,
        )

    def __repr__(self) -> str:
        return f"Bucket(name={self._name!r})"
