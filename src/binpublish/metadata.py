"""
Workspace metadata as emitted by `cargo metadata --format-version=1`.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from binpublish.errors import MetadataError, PackageNotFoundError


class Package(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    id: str


class WorkspaceMetadata(BaseModel):
    """Subset of the metadata document needed to publish binaries.

    Older documents may omit `packages` and `workspace_members`, so both
    default to empty lists. Keys not modelled here are ignored.
    """

    model_config = ConfigDict(frozen=True)

    packages: List[Package] = Field(default_factory=list)
    target_directory: str
    workspace_members: List[str] = Field(default_factory=list)

    @classmethod
    def from_json(cls, text: str) -> "WorkspaceMetadata":
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise MetadataError(f"Invalid metadata document: {e}") from e

    def workspace_package(self) -> Optional[Package]:
        """Return the first package whose id is listed as a workspace member.

        Members are walked in document order; for each one the packages are
        scanned in order, so the earliest member with a match wins.
        """
        for member in self.workspace_members:
            for package in self.packages:
                if package.id == member:
                    return package
        return None

    def require_workspace_package(self) -> Package:
        package = self.workspace_package()
        if package is None:
            raise PackageNotFoundError(
                f"No package matches any of the {len(self.workspace_members)} workspace member(s)"
            )
        return package
