"""Signed HTTP calls against the object storage REST endpoint.

Every reply is a JSON envelope::

    {"code": 0, "message": "SUCCESS", "data": {...}}

A call succeeds only when the envelope code is 0 and the HTTP status is 200.
Transport failures (connection errors, undecodable bodies) are raised as-is;
server-reported failures are raised as ``ReplyError``. No retries happen at
this layer.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional, TypeVar

import requests
from pydantic import BaseModel

from qcos.core.const import API_URL, NO_DATA_CODE, SUCCESS_CODE, USER_AGENT
from qcos.core.exceptions import ReplyError

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

CONTENT_FIELD = "filecontent"


class Method(str, Enum):
    """Kind of call: reads go in the query string, writes in the body."""

    READ = "GET"
    WRITE = "POST"


class Reply(BaseModel):
    """Standard response envelope."""

    code: int
    message: str = ""
    data: Optional[Any] = None


class Transport:
    """Sends signed requests and decodes reply envelopes.

    The transport holds no per-upload state and can be shared by any number
    of resource handles and concurrent uploads.
    """

    def __init__(
        self,
        endpoint: str = API_URL,
        session: requests.Session | None = None,
        timeout: float | None = None,
        user_agent: str = USER_AGENT,
    ) -> None:
        """Initialize the transport.

        Args:
            endpoint: Base URL without a trailing slash.
            session: Optional requests session for connection pooling.
            timeout: Optional timeout in seconds applied to every request.
            user_agent: Client identifier sent with every request.
        """
        self.endpoint = endpoint.rstrip("/")
        self._session = session or requests.Session()
        self.timeout = timeout
        self.user_agent = user_agent

    def url(self, resource_path: str) -> str:
        """Return the absolute URL of a resource path."""
        return self.endpoint + resource_path

    def call(
        self,
        method: Method,
        resource_path: str,
        auth: str,
        params: dict[str, str],
        result_type: type[ResultT] | None = None,
        multipart: bool = False,
        content: bytes | None = None,
    ) -> ResultT | None:
        """Make one signed call and decode its reply.

        Args:
            method: ``Method.READ`` or ``Method.WRITE``.
            resource_path: Escaped resource path of the target.
            auth: Authorization token.
            params: String parameters, including ``op``.
            result_type: Model for the reply ``data``; ``None`` when the
                operation returns no content.
            multipart: Send a write as multipart form fields instead of JSON.
            content: File content for multipart writes, sent as an unnamed
                file part.

        Returns:
            The parsed ``data`` when ``result_type`` is given, else ``None``.

        Raises:
            requests.RequestException: If the request cannot be completed.
            ValueError: If the reply body is not a JSON envelope.
            ReplyError: If the server reports a failure, or ``result_type``
                was requested but the reply carries no data.
        """
        headers = {"User-Agent": self.user_agent, "Authorization": auth}
        url = self.url(resource_path)
        kwargs: dict[str, Any] = {"headers": headers, "timeout": self.timeout}

        if method is Method.READ:
            kwargs["params"] = params
        elif multipart or content is not None:
            kwargs["files"] = _multipart_fields(params, content)
        else:
            kwargs["json"] = params

        logger.debug("%s %s op=%s", method.value, url, params.get("op", ""))
        response = self._session.request(method.value, url, **kwargs)
        reply = Reply.model_validate(response.json())
        logger.debug(
            "%s %s response: status=%d code=%d",
            method.value,
            url,
            response.status_code,
            reply.code,
        )

        if reply.code != SUCCESS_CODE:
            logger.warning(
                "Server error for %s: code=%d message=%s",
                url,
                reply.code,
                reply.message,
            )
            raise ReplyError(reply.code, reply.message)

        if response.status_code != requests.codes.ok:
            raise ReplyError(response.status_code, reply.message)

        if result_type is None:
            return None
        if reply.data is None:
            raise ReplyError(NO_DATA_CODE, "no data")
        return result_type.model_validate(reply.data)


def _multipart_fields(
    params: dict[str, str], content: bytes | None
) -> list[tuple[str, tuple]]:
    """Build the ``files`` argument for a multipart form body.

    Plain parameters become form fields without a filename. Content, when
    present, becomes a single file part with an empty filename.
    """
    fields: list[tuple[str, tuple]] = [
        (key, (None, value)) for key, value in params.items()
    ]
    if content is not None:
        fields.append((CONTENT_FIELD, ("", content, "application/octet-stream")))
    return fields
