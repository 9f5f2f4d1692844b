"""Tests for the gcsbench command line interface."""

import json
from unittest.mock import patch

import pytest
import requests
from typer.testing import CliRunner

from gcsbench import __version__
from gcsbench.core.cli.app import app

runner = CliRunner()
ENV = {"TERM": "dumb", "NO_COLOR": "1", "RICH_DISABLE": "1"}
SESSION_URL = (
    "https://storage.googleapis.com/upload/storage/v1/b/test-bucket/o"
    "?uploadType=resumable&upload_id=test-upload-id"
)


@pytest.fixture(autouse=True)
def unauthenticated_session():
    with patch(
        "gcsbench.core.cli.app.build_authorized_session",
        side_effect=requests.Session,
    ) as mock_build:
        yield mock_build


def invoke(*args):
    return runner.invoke(app, list(args), color=False, env=ENV)


def test_cli_version():
    result = invoke("--version")

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_cli_help_includes_subcommands():
    result = invoke("--help")

    assert result.exit_code == 0
    for command in ("obj", "mobj", "offset", "cancel"):
        assert command in result.output


def test_obj_benchmark(mock_requests):
    route = mock_requests.put(
        "https://test-bucket.storage.googleapis.com/x", status_code=200
    )

    result = invoke("obj", "--bucket", "test-bucket", "--size", "4KB", "-r", "2")

    assert result.exit_code == 0, result.output
    assert route.call_count == 2
    assert len(route.last_request.body) == 4096
    assert "repetition 1\t" in result.output
    assert "repetition 2\t" in result.output
    assert "avg speed" in result.output


def test_obj_object_name_from_env(mock_requests, monkeypatch):
    monkeypatch.setenv("GCSBENCH_OBJECT_NAME", "bench-object")
    route = mock_requests.put(
        "https://test-bucket.storage.googleapis.com/bench-object", status_code=200
    )

    result = invoke("obj", "-b", "test-bucket", "-r", "1")

    assert result.exit_code == 0, result.output
    assert route.called


def test_obj_requires_bucket(mock_requests):
    result = invoke("obj", "--size", "4KB")

    assert result.exit_code == 1
    assert not mock_requests.called


def test_obj_rejects_bad_size(mock_requests):
    result = invoke("obj", "--bucket", "test-bucket", "--size", "lots")

    assert result.exit_code == 2
    assert not mock_requests.called


def test_obj_upload_failure_exits_non_zero(mock_requests):
    mock_requests.put(
        "https://test-bucket.storage.googleapis.com/x", status_code=403
    )

    result = invoke("obj", "--bucket", "test-bucket", "-r", "3")

    assert result.exit_code == 1
    assert mock_requests.call_count == 1


def test_obj_connection_error_exits_non_zero(mock_requests):
    mock_requests.put(
        "https://test-bucket.storage.googleapis.com/x",
        exc=requests.ConnectionError("unreachable"),
    )

    result = invoke("obj", "--bucket", "test-bucket")

    assert result.exit_code == 1


def test_mobj_benchmark(fake_server):
    result = invoke("mobj", "--bucket", "test-bucket", "--chunk", "256KB", "-r", "1")

    assert result.exit_code == 0, result.output
    assert "get_resume_offset() = 262144, False" in result.output
    assert "get_resume_offset() = 524288, True" in result.output
    assert len(fake_server.data) == 524288


def test_mobj_rejects_unaligned_chunk(mock_requests):
    result = invoke("mobj", "--bucket", "test-bucket", "--chunk", "100KB")

    assert result.exit_code == 1
    assert not mock_requests.called


def test_offset_command(mock_requests):
    mock_requests.put(
        SESSION_URL,
        status_code=200,
        headers={
            "X-HTTP-Status-Code-Override": "308",
            "Range": "bytes=0-1048575",
        },
    )

    result = invoke("offset", SESSION_URL)

    assert result.exit_code == 0, result.output
    assert "offset=1048576 complete=false" in result.output


def test_offset_command_completed_upload(mock_requests):
    mock_requests.put(SESSION_URL, status_code=200, text=json.dumps({"size": "10"}))

    result = invoke("offset", SESSION_URL)

    assert "offset=10 complete=true" in result.output


@pytest.mark.parametrize("status_code, exit_code", [(200, 0), (499, 0), (404, 1)])
def test_cancel_command(mock_requests, status_code, exit_code):
    mock_requests.delete(SESSION_URL, status_code=status_code)

    result = invoke("cancel", SESSION_URL)

    assert result.exit_code == exit_code
