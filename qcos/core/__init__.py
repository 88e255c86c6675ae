from .auth import Credentials, NonceSource, Signer
from .bucket import Bucket
from .config import ClientConfig
from .cos import Cos
from .directory import Directory
from .exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    CosError,
    NoContentError,
    ReplyError,
    SessionCorruptError,
    UnexpectedEndOfDataError,
    UnsupportedContentError,
    UploadInterruptedError,
)
from .file import File
from .models import (
    CreateDirResult,
    ListDirParams,
    ListDirResult,
    ListPattern,
    PathInfo,
    UploadResult,
)
from .upload.slice_uploader import SliceUploader
from .utils.paths import escape_path

__all__ = [
    "Bucket",
    "ClientConfig",
    "ConfigLoadError",
    "ConfigValidationError",
    "Cos",
    "CosError",
    "CreateDirResult",
    "Credentials",
    "Directory",
    "File",
    "ListDirParams",
    "ListDirResult",
    "ListPattern",
    "NoContentError",
    "NonceSource",
    "PathInfo",
    "ReplyError",
    "SessionCorruptError",
    "Signer",
    "SliceUploader",
    "UnexpectedEndOfDataError",
    "UnsupportedContentError",
    "UploadInterruptedError",
    "UploadResult",
    "escape_path",
]
