import json

import pytest

from binpublish.metadata import WorkspaceMetadata


@pytest.fixture
def target_dir(tmp_path):
    path = tmp_path / "build"
    path.mkdir()
    return path


@pytest.fixture
def publish_dir(tmp_path):
    return tmp_path / "out"


@pytest.fixture
def metadata_doc(target_dir):
    return {
        "packages": [
            {"name": "serde", "version": "1.0.0", "id": "serde#1.0.0"},
            {"name": "tool", "version": "1.2.0", "id": "tool#1.2.0"},
        ],
        "target_directory": str(target_dir),
        "workspace_members": ["tool#1.2.0"],
        "version": 1,
    }


@pytest.fixture
def metadata(metadata_doc):
    return WorkspaceMetadata.from_json(json.dumps(metadata_doc))


@pytest.fixture
def write_binary(target_dir):
    """Create target_dir/<target>/release/<filename>."""

    def _write(target, filename, content=b"\x7fELF"):
        release = target_dir / target / "release"
        release.mkdir(parents=True, exist_ok=True)
        binary = release / filename
        binary.write_bytes(content)
        return binary

    return _write
