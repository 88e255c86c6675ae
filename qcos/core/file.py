"""File handles and file operations."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel

from qcos.core.content import Content, read_content
from qcos.core.models import PathInfo, UploadResult
from qcos.core.transport import Method
from qcos.core.upload.slice_uploader import SliceUploader
from qcos.core.utils.hashing import sha1_hex
from qcos.core.utils.paths import escape_path

if TYPE_CHECKING:
    from qcos.core.directory import Directory

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


class File:
    """A file stored in a directory of a bucket."""

    def __init__(self, directory: Directory, name: str) -> None:
        """Initialize the file handle.

        Args:
            directory: Directory holding the file.
            name: File name.

        Raises:
            ValueError: If ``name`` is empty.
        """
        if not escape_path(name):
            raise ValueError("file name must not be empty")
        self._dir = directory
        self._raw_name = name

    @property
    def dir(self) -> Directory:
        """Directory holding the file."""
        return self._dir

    @property
    def name(self) -> str:
        """Escaped file name, without leading or trailing slashes."""
        return escape_path(self._raw_name)

    @property
    def raw_name(self) -> str:
        """Name as given by the caller."""
        return self._raw_name

    @property
    def full_name(self) -> str:
        """Escaped directory name followed by the escaped file name."""
        return self._dir.name + self.name

    @property
    def url(self) -> str:
        """URL of the file on the REST endpoint."""
        return self._dir.bucket.url(self.full_name)

    def sign(self, seconds: int) -> str:
        """Return a multi-use token when ``seconds > 0``, else a single-use one."""
        return self._dir.bucket.sign(self.full_name, seconds)

    def upload(self, content: Content, biz_attr: str = "") -> UploadResult:
        """Upload the whole content in a single request.

        Suited to small files; use ``upload_slice`` for large ones.

        Args:
            content: Bytes, a path of a local file, or a binary stream.
            biz_attr: Attributes stored with the file.

        Raises:
            UnsupportedContentError: If the content type is not supported.
            NoContentError: If the content resolves to nothing.
            ReplyError: If the server rejects the upload.
        """
        data = read_content(content)
        logger.info("Uploading %d bytes to %s", len(data), self.full_name)
        return self.upload_call(
            {"op": "upload", "biz_attr": biz_attr, "sha": sha1_hex(data)},
            UploadResult,
            content=data,
        )

    def upload_slice(
        self,
        local_file: str | os.PathLike,
        biz_attr: str = "",
        slice_size: int = 0,
        session: str = "",
        progress_callback: Callable[[int], None] | None = None,
        verbose: bool = False,
    ) -> UploadResult:
        """Upload a local file in slices.

        Suited to large files. A failed upload raises
        ``UploadInterruptedError``; passing its ``session`` to a new call
        resumes where the server stopped.

        Args:
            local_file: Path of the local file.
            biz_attr: Attributes stored with the file.
            slice_size: Wanted slice size; the configured default is used
                when not positive.
            session: Session of an interrupted upload, or empty.
            progress_callback: Called with the byte count of every accepted
                chunk.
            verbose: Show a progress bar.

        Returns:
            The result carrying the public URL of the completed file.
        """
        if slice_size <= 0:
            slice_size = self._dir.bucket.cos.config.slice_size
        uploader = SliceUploader(
            self,
            local_file,
            biz_attr=biz_attr,
            slice_size=slice_size,
            session=session,
            progress_callback=progress_callback,
            verbose=verbose,
        )
        return uploader.upload()

    def update(self, biz_attr: str) -> None:
        """Replace the attributes of the file."""
        self._dir.bucket.call(
            Method.WRITE,
            self.full_name,
            self.sign(0),
            {"op": "update", "biz_attr": biz_attr},
        )

    def stat(self) -> PathInfo:
        """Return information about the file."""
        return self._dir.bucket.call(
            Method.READ, self.full_name, self._multi_sign(), {"op": "stat"}, PathInfo
        )

    def delete(self) -> None:
        """Delete the file."""
        self._dir.bucket.call(
            Method.WRITE, self.full_name, self.sign(0), {"op": "delete"}
        )

    def upload_call(
        self,
        params: dict[str, str],
        result_type: type[ResultT],
        content: bytes | None = None,
    ) -> ResultT:
        """Send a multipart upload call for this file.

        Args:
            params: Form fields, including ``op``.
            result_type: Model of the reply data.
            content: File content part, if any.
        """
        return self._dir.bucket.call(
            Method.WRITE,
            self.full_name,
            self._multi_sign(),
            params,
            result_type=result_type,
            multipart=True,
            content=content,
        )

    def _multi_sign(self) -> str:
        return self.sign(self._dir.bucket.cos.config.sign_seconds)

    def __repr__(self) -> str:
        return f"File(bucket={self._dir.bucket.name!r}, name={self.full_name!r})"
