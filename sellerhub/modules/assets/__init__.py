"""Hosted image asset domain exports."""

from .client import AssetHostClient, UploadSource, iter_uploads, upload_many
from .exceptions import AssetHostError, DeleteError, InvalidUrlError, ListError, UploadError
from .models import (
    AssetRecord,
    AssetReference,
    DeletionItem,
    DeletionOutcome,
    DeletionReport,
    PhotoSet,
    UploadedAsset,
)
from .reconciler import PhotoReconciler
from .resolver import IdentifierResolver, extract_file_path, is_hosted_url

__all__ = [
    "AssetHostClient",
    "AssetHostError",
    "AssetRecord",
    "AssetReference",
    "DeleteError",
    "DeletionItem",
    "DeletionOutcome",
    "DeletionReport",
    "IdentifierResolver",
    "InvalidUrlError",
    "ListError",
    "PhotoReconciler",
    "PhotoSet",
    "UploadError",
    "UploadSource",
    "UploadedAsset",
    "extract_file_path",
    "is_hosted_url",
    "iter_uploads",
    "upload_many",
]
