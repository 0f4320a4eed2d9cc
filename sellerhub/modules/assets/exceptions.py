"""Asset host specific exceptions."""


class AssetHostError(Exception):
    """Base class for failures talking to the asset host."""


class InvalidUrlError(AssetHostError):
    """Raised when a stored asset URL cannot be turned into a file path."""


class ListError(AssetHostError):
    """Raised when the asset host listing request fails."""


class UploadError(AssetHostError):
    """Raised on transport or quota failures while uploading."""


class DeleteError(AssetHostError):
    """Raised when the asset host rejects a delete, e.g. for an unknown id."""
