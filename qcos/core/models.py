"""Pydantic models for the object storage service replies and parameters.

Server replies wrap these payloads in a ``{code, message, data}`` envelope;
the models below describe the ``data`` part. Unknown fields are ignored so
that newer server versions do not break the client.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
    field_validator,
)

from qcos.core.const import DEFAULT_LIST_NUM


class _Reply(BaseModel):
    model_config = ConfigDict(extra="ignore")


class UploadResult(_Reply):
    """Result of a finished upload.

    Attributes:
        access_url: URL for downloading through the service.
        resource_path: Resource path of the stored file.
        source_url: Origin URL of the stored file.
        url: Public URL. Only non-empty once the file is complete.
    """

    access_url: str = ""
    resource_path: str = ""
    source_url: str = ""
    url: str = ""

    @property
    def is_complete(self) -> bool:
        """Whether the server considers the file fully uploaded."""
        return bool(self.url)


class UploadSliceResult(UploadResult):
    """Result of one chunk of a slice upload."""

    offset: NonNegativeInt = 0
    session: str = ""

    def to_upload_result(self) -> UploadResult:
        """Project the chunk result onto the whole-file result fields."""
        return UploadResult(
            access_url=self.access_url,
            resource_path=self.resource_path,
            source_url=self.source_url,
            url=self.url,
        )


class UploadSliceFirstResult(UploadSliceResult):
    """Result of the negotiation call that opens a slice upload."""

    slice_size: NonNegativeInt = 0


class CreateDirResult(_Reply):
    """Result of creating a directory."""

    ctime: str = ""
    resource_path: str = ""


class PathInfo(_Reply):
    """Directory or file information as returned by stat and list calls."""

    access_url: str = ""
    biz_attr: str = ""
    ctime: str = ""
    filelen: int = 0
    filesize: int = 0
    mtime: str = ""
    name: str = ""
    sha: str = ""
    source_url: str = ""


class ListDirResult(_Reply):
    """One page of a directory listing or prefix search."""

    context: str = ""
    dircount: int = 0
    filecount: int = 0
    has_more: bool = False
    infos: list[PathInfo] = Field(default_factory=list)

    @field_validator("infos", mode="before")
    @classmethod
    def _null_infos(cls, value: Any) -> Any:
        return [] if value is None else value


class ListPattern(str, Enum):
    """What a directory listing returns."""

    BOTH = "eListBoth"
    DIR_ONLY = "eListDirOnly"
    FILE_ONLY = "eListFileOnly"


class ListDirParams(BaseModel):
    """Parameters for directory listing and prefix search.

    Attributes:
        num: Maximum number of entries to return.
        pattern: Whether to list directories, files, or both.
        order: 0 for ascending order, 1 for descending order.
        context: Empty for the first page, otherwise the ``context`` of the
            previous page.
    """

    num: PositiveInt = DEFAULT_LIST_NUM
    pattern: ListPattern = ListPattern.BOTH
    order: Literal[0, 1] = 0
    context: str = ""

    def to_query(self) -> dict[str, str]:
        """Return the parameters as query string values."""
        return {
            "num": str(self.num),
            "pattern": self.pattern.value,
            "order": str(self.order),
            "context": self.context,
        }
