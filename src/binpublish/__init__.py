"""
Copy a workspace's release binaries into a versioned publish directory.
"""

from binpublish.errors import BinPublishError, MetadataError, PackageNotFoundError
from binpublish.metadata import Package, WorkspaceMetadata
from binpublish.publisher import Publisher, PublishReport, PublishResult, PublishStatus

__version__ = "0.1.0"

__all__ = [
    "BinPublishError",
    "MetadataError",
    "Package",
    "PackageNotFoundError",
    "Publisher",
    "PublishReport",
    "PublishResult",
    "PublishStatus",
    "WorkspaceMetadata",
]
