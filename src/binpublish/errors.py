class BinPublishError(Exception):
    """Base class for fatal publishing errors."""


class MetadataError(BinPublishError):
    """The metadata command failed or produced an unreadable document."""


class PackageNotFoundError(BinPublishError):
    """No package in the metadata matches a workspace member."""
