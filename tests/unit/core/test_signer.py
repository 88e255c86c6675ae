import base64
import threading

import pytest
from cos_helpers import APP_ID, BUCKET, NONCE, SECRET_ID, SECRET_KEY, decode_token

from qcos.core.auth import Credentials, NonceSource, Signer

MULTI_USE_TOKEN = (
    "5bIObv9KXNcITrcVNRGCLG3K6xxhPTIwMDAwMSZiPW5ld2J1Y2tldCZrPUFLSURVZkxVRVVpZ1Fp"
    "WHFtN0NWU3NwS0pudWFpSUt0eHFBdiZlPTE0Mzg2NjkxMTUmdD0xNDM2MDc3MTE1JnI9MTExNjIm"
    "Zj0="
)
SINGLE_USE_TOKEN = (
    "OXy21aC6AjhScJaJqrBxcS0Y7lNhPTIwMDAwMSZiPW5ld2J1Y2tldCZrPUFLSURVZkxVRVVpZ1Fp"
    "WHFtN0NWU3NwS0pudWFpSUt0eHFBdiZlPTAmdD0xNDM2MDc3MTE1JnI9MTExNjImZj0vMjAwMDAx"
    "L25ld2J1Y2tldC90ZW5jZW50X3Rlc3QuanBn"
)
ISSUED_AT = 1436077115
EXPIRES_AT = 1438669115
SINGLE_USE_PATH = "/200001/newbucket/tencent_test.jpg"


@pytest.fixture
def credentials():
    return Credentials(app_id=APP_ID, secret_id=SECRET_ID, secret_key=SECRET_KEY)


@pytest.fixture
def signer(credentials):
    return Signer(credentials, nonce_source=lambda: NONCE, clock=lambda: ISSUED_AT)


def test_sign_multi_use_vector(signer):
    """Multi-use token matches the reference vector."""
    assert signer.sign(BUCKET, EXPIRES_AT, ISSUED_AT, NONCE) == MULTI_USE_TOKEN


def test_sign_single_use_vector(signer):
    """Single-use token matches the reference vector."""
    token = signer.sign(BUCKET, 0, ISSUED_AT, NONCE, SINGLE_USE_PATH)
    assert token == SINGLE_USE_TOKEN


def test_sign_is_deterministic(signer):
    tokens = {signer.sign(BUCKET, EXPIRES_AT, ISSUED_AT, NONCE) for _ in range(5)}
    assert tokens == {MULTI_USE_TOKEN}


def test_token_embeds_payload_after_digest(signer):
    raw = base64.b64decode(signer.sign(BUCKET, 0, ISSUED_AT, NONCE, SINGLE_USE_PATH))
    assert raw[20:] == (
        f"a={APP_ID}&b={BUCKET}&k={SECRET_ID}&e=0&t={ISSUED_AT}"
        f"&r={NONCE}&f={SINGLE_USE_PATH}"
    ).encode()


def test_sign_multi_uses_clock_and_lifetime(signer):
    assert signer.sign_multi(BUCKET, EXPIRES_AT - ISSUED_AT) == MULTI_USE_TOKEN


def test_sign_multi_rejects_non_positive_lifetime(signer):
    with pytest.raises(ValueError):
        signer.sign_multi(BUCKET, 0)


def test_sign_once_binds_resource_path(signer):
    assert signer.sign_once(BUCKET, SINGLE_USE_PATH) == SINGLE_USE_TOKEN


def test_sign_for_picks_token_kind(signer):
    multi = decode_token(signer.sign_for(BUCKET, SINGLE_USE_PATH, 60))
    assert multi["e"] == str(ISSUED_AT + 60)
    assert multi["f"] == ""

    once = decode_token(signer.sign_for(BUCKET, SINGLE_USE_PATH, 0))
    assert once["e"] == "0"
    assert once["f"] == SINGLE_USE_PATH


def test_nonce_changes_per_token(credentials):
    nonces = iter([1, 2])
    signer = Signer(credentials, nonce_source=lambda: next(nonces), clock=lambda: 1)
    first = decode_token(signer.sign_multi(BUCKET, 60))
    second = decode_token(signer.sign_multi(BUCKET, 60))
    assert (first["r"], second["r"]) == ("1", "2")


def test_default_signer_generates_valid_tokens(credentials):
    payload = decode_token(Signer(credentials).sign_multi(BUCKET, 60))
    assert payload["a"] == APP_ID
    assert int(payload["r"]) >= 0
    assert int(payload["e"]) - int(payload["t"]) == 60


def test_credentials_are_immutable_and_hide_secret(credentials):
    with pytest.raises(Exception):
        credentials.secret_key = "other"
    assert SECRET_KEY not in repr(credentials)
    assert SECRET_KEY not in str(credentials)


def test_nonce_source_is_reproducible_with_seed():
    first = NonceSource(seed=42)
    second = NonceSource(seed=42)
    assert [first() for _ in range(3)] == [second() for _ in range(3)]


def test_nonce_source_is_safe_across_threads():
    source = NonceSource(seed=7)
    results: list[int] = []
    lock = threading.Lock()

    def draw():
        values = [source() for _ in range(200)]
        with lock:
            results.extend(values)

    threads = [threading.Thread(target=draw) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 1600
    assert all(value >= 0 for value in results)
    assert len(set(results)) == len(results)
