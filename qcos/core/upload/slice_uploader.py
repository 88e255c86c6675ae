"""Resumable slice upload of a local file.

The protocol runs in two phases over the same ``upload_slice`` operation:

1. A negotiation call sends the whole-file SHA-1, the file size, the wanted
   slice size and, when resuming, the previous session. The server either
   recognizes the content and completes immediately, or answers with the
   session, the offset to continue from and possibly its own slice size.
2. Chunks are then sent strictly in order, each carrying the session, its
   own SHA-1 and its offset. The server answers every chunk with the session
   it tracks; the upload completes when a reply carries the public URL.

A failed upload can be resumed by handing the session carried by
``UploadInterruptedError`` back to a new upload of the same file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, BinaryIO, Optional

import requests
from tqdm import tqdm

from qcos.core.const import DEFAULT_SLICE_SIZE
from qcos.core.exceptions import (
    ReplyError,
    SessionCorruptError,
    UnexpectedEndOfDataError,
    UploadInterruptedError,
)
from qcos.core.models import UploadResult, UploadSliceFirstResult, UploadSliceResult
from qcos.core.utils.hashing import sha1_hex, sha1_hex_stream

if TYPE_CHECKING:
    from qcos.core.file import File

logger = logging.getLogger(__name__)

UPLOAD_SLICE_OP = "upload_slice"

CALL_ERRORS = (ReplyError, requests.RequestException, ValueError)


@dataclass(frozen=True)
class SliceParams:
    """Form fields of one ``upload_slice`` call.

    Negotiation fills ``biz_attr``, ``slice_size``, ``session``, ``sha`` and
    ``filesize``; chunk calls fill ``session``, ``sha`` and ``offset`` only.
    """

    op: str = UPLOAD_SLICE_OP
    biz_attr: Optional[str] = None
    slice_size: Optional[int] = None
    session: Optional[str] = None
    sha: Optional[str] = None
    offset: Optional[int] = None
    filesize: Optional[int] = None

    def to_form(self) -> dict[str, str]:
        """Return the populated fields as strings."""
        return {
            key: str(value) for key, value in asdict(self).items() if value is not None
        }


class SliceUploader:
    """Upload one local file in slices, resuming a previous session if given.

    Instances are single-use: create one per upload attempt. After ``upload``
    returns or raises, ``session`` and ``offset`` reflect the last state
    agreed with the server.
    """

    def __init__(
        self,
        file: File,
        local_file: str | os.PathLike,
        biz_attr: str = "",
        slice_size: int = 0,
        session: str = "",
        progress_callback: Callable[[int], None] | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the slice uploader.

        Args:
            file: Remote file handle to upload to.
            local_file: Path of the local file to upload.
            biz_attr: Attributes stored with the file.
            slice_size: Wanted slice size in bytes; the default is used when
                not positive. The server may impose its own.
            session: Session of an interrupted upload to resume, or empty.
            progress_callback: Called with the byte count of every accepted
                chunk.
            verbose: Show a progress bar.
        """
        self._file = file
        self._local_file = local_file
        self._biz_attr = biz_attr
        self._slice_size = slice_size if slice_size > 0 else DEFAULT_SLICE_SIZE
        self._session = session
        self._progress_callback = progress_callback
        self._verbose = verbose

        self._offset = 0
        self._total_bytes = 0

    @property
    def session(self) -> str:
        """Session of the upload, empty once completed or when unusable."""
        return self._session

    @property
    def offset(self) -> int:
        """Offset of the next byte to send."""
        return self._offset

    @property
    def total_bytes(self) -> int:
        """Size of the local file."""
        return self._total_bytes

    @property
    def slice_size(self) -> int:
        """Slice size in effect."""
        return self._slice_size

    def upload(self) -> UploadResult:
        """Run the upload to completion.

        Returns:
            The result carrying the public URL of the completed file.

        Raises:
            OSError: If the local file cannot be opened, read or seeked.
                There is no session to resume from.
            UploadInterruptedError: If a call fails. ``session`` holds the
                session to resume from.
            UnexpectedEndOfDataError: If the whole file was sent without the
                server reporting completion.
            SessionCorruptError: If the server switched sessions mid-upload.
                The upload must restart from scratch.
        """
        with open(self._local_file, "rb") as f:
            self._total_bytes = os.fstat(f.fileno()).st_size
            sha = sha1_hex_stream(f)

            logger.info(
                "Starting slice upload of %s to %s: size=%d slice_size=%d resume=%s",
                self._local_file,
                self._file.full_name,
                self._total_bytes,
                self._slice_size,
                bool(self._session),
            )

            first = self._negotiate(sha)
            if first.is_complete:
                logger.info(
                    "Server already holds %s, upload complete", self._file.full_name
                )
                self._session = ""
                self._offset = self._total_bytes
                return first.to_upload_result()

            if first.session:
                self._session = first.session
            self._offset = first.offset
            if first.slice_size > 0:
                self._slice_size = first.slice_size

            try:
                f.seek(self._offset)
            except OSError:
                self._session = ""
                raise

            return self._upload_slices(f)

    def _negotiate(self, sha: str) -> UploadSliceFirstResult:
        params = SliceParams(
            biz_attr=self._biz_attr,
            slice_size=self._slice_size,
            session=self._session,
            sha=sha,
            filesize=self._total_bytes,
        )
        try:
            return self._file.upload_call(params.to_form(), UploadSliceFirstResult)
        except CALL_ERRORS as e:
            raise UploadInterruptedError(
                f"Slice upload negotiation failed: {e}", self._session
            ) from e

    def _upload_slices(self, f: BinaryIO) -> UploadResult:
        with tqdm(
            total=self._total_bytes,
            initial=self._offset,
            unit="B",
            unit_scale=True,
            desc=f"Uploading {self._file.full_name}",
            disable=not self._verbose,
        ) as pbar:
            while self._offset < self._total_bytes:
                try:
                    chunk = f.read(self._slice_size)
                except OSError:
                    self._session = ""
                    raise
                if not chunk:
                    break

                part = self._upload_chunk(chunk)
                if part.is_complete:
                    logger.info(
                        "Slice upload of %s complete: %d bytes",
                        self._file.full_name,
                        self._total_bytes,
                    )
                    self._offset += len(chunk)
                    self._session = ""
                    self._report(pbar, len(chunk))
                    return part.to_upload_result()

                if part.session != self._session:
                    logger.warning(
                        "Session changed during slice upload of %s at offset %d",
                        self._file.full_name,
                        self._offset,
                    )
                    self._session = ""
                    raise SessionCorruptError("session corrupt")

                self._offset += len(chunk)
                self._report(pbar, len(chunk))
                logger.debug(
                    "Uploaded slice: %d/%d bytes", self._offset, self._total_bytes
                )

                if len(chunk) < self._slice_size:
                    break

        raise UnexpectedEndOfDataError("unexpected end of data", self._session)

    def _report(self, pbar: tqdm, num_bytes: int) -> None:
        pbar.update(num_bytes)
        if self._progress_callback:
            self._progress_callback(num_bytes)

    def _upload_chunk(self, chunk: bytes) -> UploadSliceResult:
        params = SliceParams(
            session=self._session, sha=sha1_hex(chunk), offset=self._offset
        )
        try:
            return self._file.upload_call(
                params.to_form(), UploadSliceResult, content=chunk
            )
        except CALL_ERRORS as e:
            raise UploadInterruptedError(
                f"Slice upload failed at offset {self._offset}: {e}", self._session
            ) from e
