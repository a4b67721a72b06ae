"""
Sources of workspace metadata.

The publisher only needs a parsed `WorkspaceMetadata`; where it comes from is
decided by a provider. The default shells out to the build tool, the file
provider replays a saved document.
"""

import subprocess
import sys
from pathlib import Path
from typing import List

from loguru import logger

from binpublish.config import DEFAULT_METADATA_COMMAND
from binpublish.errors import MetadataError
from binpublish.metadata import WorkspaceMetadata


class MetadataProvider:
    """Interface for anything that can produce workspace metadata."""

    def load(self) -> WorkspaceMetadata:
        raise NotImplementedError


def shell_command(command: str) -> List[str]:
    """Wrap `command` so it runs through the platform shell."""
    if sys.platform == "win32":
        return ["cmd", "/C", command]
    return ["sh", "-c", command]


class ShellMetadataProvider(MetadataProvider):
    def __init__(self, command: str = DEFAULT_METADATA_COMMAND):
        self.command = command

    def run(self) -> str:
        """Run the metadata command and return its standard output."""
        logger.debug(f"Running metadata command: {self.command}")
        try:
            result = subprocess.run(
                shell_command(self.command),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise MetadataError(f"Failed to run '{self.command}': {e}") from e

        if result.returncode != 0:
            error_output = result.stderr.decode("utf-8", errors="replace").strip() if result.stderr else "No stderr output"
            raise MetadataError(f"'{self.command}' exited with code {result.returncode}: {error_output}")

        return result.stdout.decode("utf-8", errors="replace")

    def load(self) -> WorkspaceMetadata:
        return WorkspaceMetadata.from_json(self.run())


class FileMetadataProvider(MetadataProvider):
    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> WorkspaceMetadata:
        logger.debug(f"Reading metadata from {self.path}")
        try:
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise MetadataError(f"Failed to read metadata file '{self.path}': {e}") from e
        return WorkspaceMetadata.from_json(text)
