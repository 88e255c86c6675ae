"""Helpers for turning directory and file names into URL path segments."""

import re
from urllib.parse import quote_plus

_UNESCAPED = re.compile(r"%(2F|7E)", re.IGNORECASE)
_LITERALS = {"2F": "/", "7E": "~"}


def escape_path(name: str) -> str:
    """Escape a path for use in a resource path.

    Leading and trailing slashes are removed. Everything else is query
    escaped, except ``/`` and ``~`` which are kept literal so multi-level
    paths stay readable.

    Args:
        name: Raw directory or file path.

    Returns:
        The escaped path.
    """
    escaped = quote_plus(name.strip("/"), safe="")
    return _UNESCAPED.sub(lambda m: _LITERALS[m.group(1).upper()], escaped)


def dir_name(name: str) -> str:
    """Escape a directory name, always ending it with one slash unless empty."""
    escaped = escape_path(name)
    if escaped:
        return escaped + "/"
    return ""


def resource_path(app_id: str, bucket: str, path: str) -> str:
    """Join account, bucket and an already escaped path into a resource path."""
    return "/".join(["", app_id, bucket, path])
