import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_METADATA_COMMAND = "cargo metadata --format-version=1"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class PublishSettings:
    """Runtime settings, read from the environment unless overridden on the command line."""

    metadata_command: str = DEFAULT_METADATA_COMMAND
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "PublishSettings":
        return cls(
            metadata_command=os.environ.get("BINPUBLISH_METADATA_COMMAND", DEFAULT_METADATA_COMMAND),
            log_level=os.environ.get("BINPUBLISH_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )


def build_metadata_command(base: str, manifest_path: Optional[Path] = None) -> str:
    """Append a quoted `--manifest-path` to the metadata command when one is given."""
    if manifest_path is None:
        return base
    return f"{base} --manifest-path {shlex.quote(str(manifest_path))}"
