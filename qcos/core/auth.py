"""Request signing for the object storage service.

Every request carries an ``Authorization`` header holding a token derived
from the account credentials with HMAC-SHA1. The signed payload is appended
to the digest so the server can recompute and verify it on its own.

Two token flavours exist:

* multi-use tokens expire ``seconds`` after they are issued and are not
  bound to any resource;
* single-use tokens never expire but authorize exactly one resource path.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import random
import threading
import time
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

MAX_NONCE = 2**63 - 1


class Credentials(BaseModel):
    """Account credentials shared read-only by every resource handle.

    Attributes:
        app_id: Account (application) identifier.
        secret_id: Identifier of the secret key.
        secret_key: Secret key used to sign requests.
    """

    model_config = ConfigDict(frozen=True)

    app_id: str
    secret_id: str
    secret_key: str

    def __repr__(self) -> str:
        """Hide the secret key from reprs and logs."""
        return f"Credentials(app_id={self.app_id!r}, secret_id={self.secret_id!r})"

    __str__ = __repr__


class NonceSource:
    """Thread-safe source of random non-negative nonces."""

    def __init__(self, seed: int | None = None) -> None:
        """Initialize the nonce source.

        Args:
            seed: Optional seed, mostly useful for reproducible tests.
        """
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    def __call__(self) -> int:
        """Return the next nonce."""
        with self._lock:
            return self._random.randint(0, MAX_NONCE)


class Signer:
    """Builds authorization tokens for one set of credentials."""

    def __init__(
        self,
        credentials: Credentials,
        nonce_source: Callable[[], int] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the signer.

        Args:
            credentials: Credentials to sign with.
            nonce_source: Callable returning a fresh nonce per token.
                Defaults to a private ``NonceSource``.
            clock: Callable returning the current Unix time.
        """
        self.credentials = credentials
        self._nonce_source = nonce_source or NonceSource()
        self._clock = clock

    def sign(
        self,
        bucket: str,
        expires_at: int,
        issued_at: int,
        nonce: int,
        resource_path: str = "",
    ) -> str:
        """Compute a token from fully specified inputs.

        The result only depends on the arguments and the credentials.

        Args:
            bucket: Bucket name.
            expires_at: Expiry as Unix time, 0 for single-use tokens.
            issued_at: Issue time as Unix time.
            nonce: Random non-negative integer.
            resource_path: Resource path for single-use tokens, empty otherwise.

        Returns:
            Base64 encoded digest followed by the signed payload.
        """
        payload = (
            f"a={self.credentials.app_id}&b={bucket}&k={self.credentials.secret_id}"
            f"&e={expires_at}&t={issued_at}&r={nonce}&f={resource_path}"
        ).encode("utf-8")
        digest = hmac.new(
            self.credentials.secret_key.encode("utf-8"), payload, hashlib.sha1
        ).digest()
        return base64.b64encode(digest + payload).decode("ascii")

    def sign_multi(self, bucket: str, seconds: int) -> str:
        """Return a token valid for any resource of ``bucket`` for ``seconds``."""
        if seconds <= 0:
            raise ValueError("seconds must be positive for a multi-use token")
        issued_at = int(self._clock())
        return self.sign(bucket, issued_at + seconds, issued_at, self._nonce_source())

    def sign_once(self, bucket: str, resource_path: str) -> str:
        """Return a non-expiring token bound to exactly ``resource_path``."""
        issued_at = int(self._clock())
        return self.sign(bucket, 0, issued_at, self._nonce_source(), resource_path)

    def sign_for(self, bucket: str, resource_path: str, seconds: int) -> str:
        """Return a multi-use token when ``seconds > 0``, else a single-use one."""
        if seconds > 0:
            return self.sign_multi(bucket, seconds)
        return self.sign_once(bucket, resource_path)
