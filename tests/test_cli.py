import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from binpublish.cli import app, get_provider
from binpublish.config import PublishSettings
from binpublish.provider import FileMetadataProvider, ShellMetadataProvider

LINUX = "x86_64-unknown-linux-gnu"

runner = CliRunner()


@pytest.fixture
def metadata_file(tmp_path, metadata_doc):
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps(metadata_doc))
    return path


def test_publish_from_metadata_file(metadata_file, publish_dir, write_binary):
    write_binary(LINUX, "tool", b"bin")

    result = runner.invoke(app, [str(publish_dir), "--metadata-file", str(metadata_file)])

    assert result.exit_code == 0, result.output
    assert (publish_dir / "tool" / "1.2.0" / LINUX / "tool").read_bytes() == b"bin"
    assert LINUX in result.output


def test_rerun_succeeds_without_copying(metadata_file, publish_dir, write_binary):
    write_binary(LINUX, "tool")
    args = [str(publish_dir), "--metadata-file", str(metadata_file)]

    assert runner.invoke(app, args).exit_code == 0
    result = runner.invoke(app, args)

    assert result.exit_code == 0
    assert "already published" in result.output


@patch("binpublish.provider.subprocess.run")
def test_metadata_command_option(mock_run, metadata_doc, publish_dir, write_binary):
    mock_run.return_value = MagicMock(returncode=0, stdout=json.dumps(metadata_doc).encode(), stderr=b"")
    write_binary(LINUX, "tool")

    result = runner.invoke(app, [str(publish_dir), "--metadata-command", "cat meta.json"])

    assert result.exit_code == 0, result.output
    assert mock_run.call_args[0][0][-1] == "cat meta.json"


@patch("binpublish.provider.subprocess.run")
def test_metadata_command_failure_exits_1(mock_run, publish_dir):
    mock_run.return_value = MagicMock(returncode=101, stdout=b"", stderr=b"error: could not find `Cargo.toml`")

    result = runner.invoke(app, [str(publish_dir)])

    assert result.exit_code == 1
    assert not publish_dir.exists()


def test_unresolvable_package_exits_1(tmp_path, metadata_doc, publish_dir):
    metadata_doc["workspace_members"] = ["other#0.0.1"]
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps(metadata_doc))

    result = runner.invoke(app, [str(publish_dir), "--metadata-file", str(path)])

    assert result.exit_code == 1


def test_missing_publish_dir_argument():
    result = runner.invoke(app, [])
    assert result.exit_code != 0


def test_get_provider_precedence(tmp_path):
    settings = PublishSettings(metadata_command="from-env")

    assert isinstance(get_provider(settings, metadata_file=tmp_path / "m.json"), FileMetadataProvider)

    provider = get_provider(settings)
    assert isinstance(provider, ShellMetadataProvider)
    assert provider.command == "from-env"

    provider = get_provider(settings, metadata_command="explicit", manifest_path=tmp_path / "Cargo.toml")
    assert provider.command.startswith("explicit --manifest-path ")
