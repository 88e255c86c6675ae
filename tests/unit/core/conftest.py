import re

import pytest
from cos_helpers import (
    APP_ID,
    BUCKET,
    ENDPOINT,
    NONCE,
    SECRET_ID,
    SECRET_KEY,
    FakeSliceServer,
)

import qcos


@pytest.fixture
def cos():
    """Client with a fixed nonce pointing at the mocked endpoint."""
    return qcos.Cos(
        APP_ID,
        SECRET_ID,
        SECRET_KEY,
        config=qcos.ClientConfig(endpoint=ENDPOINT),
        nonce_source=lambda: NONCE,
    )


@pytest.fixture
def bucket(cos):
    return cos.bucket(BUCKET)


@pytest.fixture
def slice_server(requests_mocker):
    server = FakeSliceServer()
    requests_mocker.post(re.compile(re.escape(ENDPOINT) + "/.*"), json=server.handle)
    return server


@pytest.fixture
def make_local_file(tmp_path):
    """Write ``size`` bytes of printable content to a file and return its path."""

    def _make(size: int, name: str = "local.bin"):
        alphabet = b"abcdefghijklmnopqrstuvwxyz0123456789"
        data = bytes(alphabet[(i * 7 + i // 36) % len(alphabet)] for i in range(size))
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _make
