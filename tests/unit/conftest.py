import json
import re

import pytest
import requests
import requests_mock

from gcsbench.core.storage.gcs_client import GcsClient

BUCKET = "test-bucket"
OBJECT_NAME = "x"
START_URL = (
    f"https://storage.googleapis.com/upload/storage/v1/b/{BUCKET}/o"
    "?uploadType=resumable"
)
SESSION_URL = f"{START_URL}&upload_id=test-upload-id"
OBJECT_URL = f"https://{BUCKET}.storage.googleapis.com/{OBJECT_NAME}"

_CHUNK_RANGE = re.compile(r"^bytes (\d+)-(\d+)/(\*|\d+)$")
_FINALIZE_RANGE = re.compile(r"^bytes \*/(\d+)$")


class FakeResumableServer:
    """In-memory GCS resumable session served through requests-mock."""

    BUCKET = BUCKET
    OBJECT_NAME = OBJECT_NAME
    START_URL = START_URL
    SESSION_URL = SESSION_URL

    def __init__(self) -> None:
        self.data = bytearray()
        self.total_size: int | None = None
        self.sessions_started = 0

    @property
    def complete(self) -> bool:
        return self.total_size is not None and len(self.data) == self.total_size

    def start_session(self, request, context):
        self.sessions_started += 1
        context.status_code = 200
        context.headers["Location"] = SESSION_URL
        return ""

    def put(self, request, context):
        content_range = request.headers["Content-Range"]
        body = request.body or b""

        finalize = _FINALIZE_RANGE.match(content_range)
        chunk = _CHUNK_RANGE.match(content_range)
        if finalize:
            self.total_size = int(finalize.group(1))
        elif chunk:
            first, last, total = chunk.groups()
            assert int(first) == len(self.data)
            assert int(last) - int(first) + 1 == len(body)
            self.data.extend(body)
            if total != "*":
                self.total_size = int(total)
        else:
            assert content_range == "bytes */*"
            assert body == b""

        return self._status_response(context)

    def _status_response(self, context):
        context.status_code = 200
        if self.complete:
            return json.dumps({
                "bucket": BUCKET,
                "name": OBJECT_NAME,
                "size": str(len(self.data)),
            })

        context.headers["X-HTTP-Status-Code-Override"] = "308"
        if self.data:
            context.headers["Range"] = f"bytes=0-{len(self.data) - 1}"
        return ""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep local GCSBENCH_* settings out of the tests."""
    for name in (
        "GCSBENCH_STORAGE_HOST",
        "GCSBENCH_TIMEOUT",
        "GCSBENCH_OBJECT_NAME",
        "GCSBENCH_REPEAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_requests():
    with requests_mock.Mocker() as m:
        yield m


@pytest.fixture
def client():
    return GcsClient(requests.Session())


@pytest.fixture
def fake_server(mock_requests):
    """Register a fresh fake resumable session endpoint."""
    server = FakeResumableServer()
    mock_requests.post(START_URL, text=server.start_session)
    mock_requests.put(SESSION_URL, text=server.put)
    return server
