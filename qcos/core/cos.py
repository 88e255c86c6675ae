"""Entry point of the object storage client."""

from __future__ import annotations

from collections.abc import Callable

from qcos.core.auth import Credentials, Signer
from qcos.core.bucket import Bucket
from qcos.core.config import ClientConfig
from qcos.core.transport import Transport


class Cos:
    """Client for one account of the object storage service.

    The client owns the credentials, the signer and the HTTP transport. All
    bucket, directory and file handles derived from it share them.
    """

    def __init__(
        self,
        app_id: str,
        secret_id: str,
        secret_key: str,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
        nonce_source: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            app_id: Account (application) identifier.
            secret_id: Identifier of the secret key.
            secret_key: Secret key used to sign requests.
            config: Client configuration. Defaults to ``ClientConfig()``.
            transport: Transport to send requests with. Built from ``config``
                when not given.
            nonce_source: Callable returning a fresh signature nonce.
        """
        self.config = config or ClientConfig()
        self.credentials = Credentials(
            app_id=app_id, secret_id=secret_id, secret_key=secret_key
        )
        self.signer = Signer(self.credentials, nonce_source=nonce_source)
        self.transport = transport or Transport(
            endpoint=self.config.endpoint,
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
        )

    @property
    def app_id(self) -> str:
        """Account identifier."""
        return self.credentials.app_id

    def bucket(self, name: str) -> Bucket:
        """Return the handle of bucket ``name``."""
        return Bucket(self, name)

    def __repr__(self) -> str:
        return f"Cos(app_id={self.app_id!r}, endpoint={self.transport.endpoint!r})"
