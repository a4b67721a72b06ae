"""
Copies release binaries from per-target build directories into the publish tree.

Expected build layout::

    target_directory/
        debug/                      host build, ignored
        release/                    host build, ignored
        x86_64-unknown-linux-gnu/
            release/<name>
        x86_64-pc-windows-gnu/
            release/<name>.exe

Produced layout::

    publish_dir/<name>/<version>/<target>/<name>[.exe]
"""

import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from loguru import logger

from binpublish.metadata import Package, WorkspaceMetadata

RELEASE_PROFILE = "release"
RESERVED_PROFILES = ("debug", "release")
WINDOWS_SUFFIX = ".exe"


class PublishStatus(Enum):
    COPIED = "copied"
    ALREADY_PUBLISHED = "already published"
    NOT_RELEASED = "not compiled in release mode"
    NO_ARTIFACT = "no binary found"


@dataclass(frozen=True)
class PublishResult:
    target: str
    status: PublishStatus
    source: Optional[Path] = None
    destination: Optional[Path] = None
    size: int = 0


@dataclass
class PublishReport:
    package: Package
    publish_path: Path
    results: List[PublishResult] = field(default_factory=list)

    @property
    def copied(self) -> List[PublishResult]:
        return [r for r in self.results if r.status is PublishStatus.COPIED]

    @property
    def skipped(self) -> List[PublishResult]:
        return [r for r in self.results if r.status is not PublishStatus.COPIED]

    @property
    def total_bytes(self) -> int:
        return sum(r.size for r in self.copied)


class Publisher:
    """Publishes the workspace package's release binaries for every compiled target."""

    def __init__(self, metadata: WorkspaceMetadata, publish_dir: Path):
        self.metadata = metadata
        self.target_directory = Path(metadata.target_directory)
        self.package = metadata.require_workspace_package()
        logger.info(self.package.id)

        self.publish_path = Path(publish_dir) / self.package.name / self.package.version
        logger.info(f"Publish path: {self.publish_path}")

    @property
    def candidates(self) -> List[str]:
        # Unix binaries have no extension, Windows ones end in .exe
        return [self.package.name, f"{self.package.name}{WINDOWS_SUFFIX}"]

    def iter_targets(self) -> Iterator[Tuple[str, Path]]:
        """Yield `(target, path)` for each cross-compilation target directory."""
        for entry in sorted(self.target_directory.iterdir(), key=lambda p: p.name):
            if not entry.is_dir():
                continue
            target = entry.stem
            if target in RESERVED_PROFILES:
                logger.debug(f"Skipping build profile directory '{entry.name}'")
                continue
            yield target, entry

    def publish_target(self, target: str) -> PublishResult:
        logger.info(f"Target: {target}")
        compile_path = self.target_directory / target / RELEASE_PROFILE
        if not compile_path.exists():
            logger.warning(f"'{target}' was not compiled in release mode")
            return PublishResult(target, PublishStatus.NOT_RELEASED)

        final_dir = self.publish_path / target
        for candidate in self.candidates:
            source = compile_path / candidate
            if not source.exists():
                continue

            destination = final_dir / candidate
            # never overwrite a published version, even if the binary differs
            if destination.exists():
                logger.info(
                    f"{self.package.name} {self.package.version} for '{target}' is already published at {destination}"
                )
                return PublishResult(target, PublishStatus.ALREADY_PUBLISHED, source, destination)

            final_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Copying {source} -> {destination}")
            shutil.copy(source, destination)
            return PublishResult(target, PublishStatus.COPIED, source, destination, destination.stat().st_size)

        logger.debug(f"No binary named {' or '.join(self.candidates)} in {compile_path}")
        return PublishResult(target, PublishStatus.NO_ARTIFACT)

    def publish(self) -> PublishReport:
        report = PublishReport(self.package, self.publish_path)
        for target, _ in self.iter_targets():
            report.results.append(self.publish_target(target))
        logger.info(f"Published {len(report.copied)} binaries, skipped {len(report.skipped)} targets")
        return report
