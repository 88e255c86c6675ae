import os
import platform

from qcos import __version__

API_URL = os.getenv("QCOS_API_URL", "http://web.file.myqcloud.com/files/v1").rstrip(
    "/"
)
USER_AGENT = (
    f"qcos-python/{__version__} "
    f"({platform.system().lower()}-{platform.machine()}-"
    f"python{platform.python_version()})"
)

DEFAULT_SLICE_SIZE = 512 * 1024
DEFAULT_SIGN_SECONDS = 60
HASH_READ_SIZE = 1024 * 1024

SUCCESS_CODE = 0
NO_DATA_CODE = -1

DEFAULT_LIST_NUM = 20
