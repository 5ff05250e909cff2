"""Tests for the tusupload command line."""
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from tusupload import TusClient
from tusupload.cli.main import app
from tusupload.core.api.errors import InitiationError, RetryExhaustedError, TransferError
from tusupload.core.upload import UploadResult, UploadState

runner = CliRunner()
ENV = {"TERM": "dumb", "NO_COLOR": "1", "COLUMNS": "200"}


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"], env=ENV)

    assert result.exit_code == 0
    assert "upload" in result.output
    assert "offset" in result.output


def test_upload_success(temp_file_factory) -> None:
    path = temp_file_factory(1000)
    done = UploadResult(
        resource_id="abc123",
        file_size=1000,
        offset=1000,
        state=UploadState.COMPLETED,
        chunks_sent=1
    )

    with patch.object(TusClient, 'upload', AsyncMock(return_value=done)) as upload:
        result = runner.invoke(app, ["upload", str(path), "-e", "http://test/upload"], env=ENV)

    assert result.exit_code == 0
    assert "Upload complete" in result.output
    assert "abc123" in result.output
    assert upload.call_args.kwargs['resource_id'] is None


def test_upload_resume_passes_resource(temp_file_factory) -> None:
    path = temp_file_factory(1000)
    done = UploadResult(resource_id="abc123", file_size=1000, offset=1000, state=UploadState.COMPLETED)

    with patch.object(TusClient, 'upload', AsyncMock(return_value=done)) as upload:
        result = runner.invoke(app, ["upload", str(path), "--resume", "abc123"], env=ENV)

    assert result.exit_code == 0
    assert upload.call_args.kwargs['resource_id'] == "abc123"


def test_upload_failure_shows_resume_hint(temp_file_factory) -> None:
    path = temp_file_factory(1000)
    error = RetryExhaustedError(
        offset=262144,
        attempts=4,
        resource_id="abc123",
        last_error=TransferError("HTTP 500", status=500)
    )

    with patch.object(TusClient, 'upload', AsyncMock(side_effect=error)):
        result = runner.invoke(app, ["upload", str(path)], env=ENV)

    assert result.exit_code == 1
    assert "--resume abc123" in result.output


def test_resume_failure_shows_resume_hint(temp_file_factory) -> None:
    path = temp_file_factory(1000)
    error = InitiationError("Cannot attach to abc123: HTTP 404", status=404, resource_id="abc123", offset=None)

    with patch.object(TusClient, 'upload', AsyncMock(side_effect=error)):
        result = runner.invoke(app, ["upload", str(path), "--resume", "abc123"], env=ENV)

    assert result.exit_code == 1
    assert "Resource: abc123" in result.output
    assert "--resume abc123" in result.output


def test_upload_invalid_chunk_size(temp_file_factory) -> None:
    path = temp_file_factory(1000)

    result = runner.invoke(app, ["upload", str(path), "--chunk-size", "10"], env=ENV)

    assert result.exit_code == 2


def test_upload_missing_file(tmp_path) -> None:
    result = runner.invoke(app, ["upload", str(tmp_path / "missing.bin")], env=ENV)

    assert result.exit_code == 2


def test_offset_command() -> None:
    with patch.object(TusClient, 'get_offset', AsyncMock(return_value=524288)):
        result = runner.invoke(app, ["offset", "abc123"], env=ENV)

    assert result.exit_code == 0
    assert "abc123: 524,288 bytes" in result.output


def test_offset_command_failure() -> None:
    error = TransferError("HTTP 404", status=404)

    with patch.object(TusClient, 'get_offset', AsyncMock(side_effect=error)):
        result = runner.invoke(app, ["offset", "abc123"], env=ENV)

    assert result.exit_code == 1
