"""Exception classes for the object storage client."""


class CosError(Exception):
    """Base error for all object storage client failures."""


class ReplyError(CosError):
    """Raised when the server reply signals a failure.

    Covers both a non-zero envelope code and a transport status other than
    200 carried by an otherwise successful envelope. In the latter case the
    transport status is used as the code.
    """

    def __init__(self, code: int, message: str):
        """Initialize ReplyError.

        Args:
            code: Envelope code reported by the server, or the HTTP status.
            message: Message reported by the server.
        """
        super().__init__(f"code: {code}, message: {message}")
        self.code = code
        self.message = message


class UploadInterruptedError(CosError):
    """Raised when a slice upload stops before completion but may be resumed.

    The ``session`` attribute holds the upload session to hand back to the
    next ``upload_slice`` call. It may be empty when the server never
    assigned one.
    """

    def __init__(self, message: str, session: str = ""):
        """Initialize UploadInterruptedError.

        Args:
            message: Human readable description of the failure.
            session: Session to resume from.
        """
        super().__init__(message)
        self.session = session


class UnexpectedEndOfDataError(UploadInterruptedError):
    """Raised when every byte was sent but the server never reported completion."""


class SessionCorruptError(CosError):
    """Raised when the server answers a chunk with a different session.

    Offset and session correlation is lost, so the upload cannot be resumed.
    """

    session = ""


class UnsupportedContentError(CosError, TypeError):
    """Raised when upload content is not bytes, a path, or a binary stream."""


class NoContentError(CosError):
    """Raised when upload content resolves to nothing."""


class ConfigLoadError(CosError):
    """Raised when a client configuration file cannot be read."""


class ConfigValidationError(CosError):
    """Raised when a client configuration fails validation."""

    def __init__(self, errors: list[str]):
        """Initialize ConfigValidationError with list of error messages.

        Args:
            errors: List of error messages from validation.
        """
        message = "\n".join(errors)
        super().__init__(message)
        self.errors = errors
