"""Directory handles and directory operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from qcos.core.file import File
from qcos.core.models import CreateDirResult, ListDirParams, ListDirResult, PathInfo
from qcos.core.transport import Method
from qcos.core.utils.paths import dir_name, escape_path

if TYPE_CHECKING:
    from qcos.core.bucket import Bucket, ResultT


class Directory:
    """A directory of a bucket. The empty name is the bucket root."""

    def __init__(self, bucket: Bucket, name: str = "") -> None:
        """Initialize the directory handle.

        Args:
            bucket: Bucket holding the directory.
            name: Directory name, possibly multi-level.
        """
        self._bucket = bucket
        self._raw_name = name

    @property
    def bucket(self) -> Bucket:
        """Bucket holding the directory."""
        return self._bucket

    @property
    def name(self) -> str:
        """Escaped name, ending with exactly one slash unless it is the root."""
        return dir_name(self._raw_name)

    @property
    def raw_name(self) -> str:
        """Name as given by the caller."""
        return self._raw_name

    def file(self, name: str) -> File:
        """Return the handle of file ``name`` in this directory.

        Raises:
            ValueError: If ``name`` is empty.
        """
        return File(self, name)

    def sign(self, seconds: int) -> str:
        """Return a multi-use token when ``seconds > 0``, else a single-use one."""
        return self._bucket.sign(self.name, seconds)

    def create(self, biz_attr: str = "") -> CreateDirResult:
        """Create the directory.

        Args:
            biz_attr: Attributes stored with the directory.
        """
        return self._post(
            self._multi_sign(),
            {"op": "create", "biz_attr": biz_attr},
            CreateDirResult,
        )

    def update(self, biz_attr: str) -> None:
        """Replace the attributes of the directory."""
        self._post(self.sign(0), {"op": "update", "biz_attr": biz_attr})

    def stat(self) -> PathInfo:
        """Return information about the directory."""
        return self._bucket.call(
            Method.READ, self.name, self._multi_sign(), {"op": "stat"}, PathInfo
        )

    def delete(self) -> None:
        """Delete the directory. The server refuses non-empty directories."""
        self._post(self.sign(0), {"op": "delete"})

    def list(self, params: Optional[ListDirParams] = None) -> ListDirResult:
        """List one page of the directory.

        Args:
            params: Listing parameters; defaults are used when ``None``.
        """
        return self.prefix_search("", params)

    def prefix_search(
        self, prefix: str, params: Optional[ListDirParams] = None
    ) -> ListDirResult:
        """List one page of the entries whose name starts with ``prefix``.

        Args:
            prefix: Name prefix. An empty prefix lists the directory.
            params: Listing parameters; defaults are used when ``None``.
        """
        params = params or ListDirParams()
        query = {"op": "list", **params.to_query()}
        return self._bucket.call(
            Method.READ,
            self.name + escape_path(prefix),
            self._multi_sign(),
            query,
            ListDirResult,
        )

    def _multi_sign(self) -> str:
        return self.sign(self._bucket.cos.config.sign_seconds)

    def _post(
        self,
        auth: str,
        params: dict[str, str],
        result_type: type[ResultT] | None = None,
    ) -> ResultT | None:
        return self._bucket.call(Method.WRITE, self.name, auth, params, result_type)

    def __repr__(self) -> str:
        return f"Directory(bucket={self._bucket.name!r}, name={self.name!r})"
