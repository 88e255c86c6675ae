"""Client configuration.

Configuration covers where and how requests are sent, never credentials:
those are always passed to ``Cos`` explicitly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, PositiveFloat, PositiveInt, ValidationError

from qcos.core.const import (
    API_URL,
    DEFAULT_SIGN_SECONDS,
    DEFAULT_SLICE_SIZE,
    USER_AGENT,
)
from qcos.core.exceptions import ConfigLoadError, ConfigValidationError


class ClientConfig(BaseModel):
    """Configuration options for a client.

    Attributes:
        endpoint: Base URL of the REST API, without a trailing slash.
        slice_size: Default slice size for slice uploads, in bytes.
        sign_seconds: Lifetime of multi-use tokens, in seconds.
        timeout: Timeout of every HTTP request, in seconds. None waits forever.
        user_agent: Client identifier sent with every request.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    endpoint: str = API_URL
    slice_size: PositiveInt = DEFAULT_SLICE_SIZE
    sign_seconds: PositiveInt = DEFAULT_SIGN_SECONDS
    timeout: Optional[PositiveFloat] = None
    user_agent: str = USER_AGENT

    @classmethod
    def from_yaml(cls, path: str | Path) -> ClientConfig:
        """Load a configuration from a YAML mapping.

        Args:
            path: Path of the YAML file.

        Returns:
            The validated configuration.

        Raises:
            ConfigLoadError: If the file cannot be read or parsed.
            ConfigValidationError: If the content is not a valid configuration.
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except OSError as e:
            raise ConfigLoadError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Cannot parse config file {path}: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigValidationError([f"{path}: top level must be a mapping"])

        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise ConfigValidationError([
                f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]) from e
