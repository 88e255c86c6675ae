"""Client library for the object storage service."""

__version__ = "0.1.0"

from .core import *  # noqa: F403, E402
from .core import __all__  # noqa: E402
