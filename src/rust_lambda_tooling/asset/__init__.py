"""Asset hashing and staging for bundled Lambda code."""

from .staging import (
    AssetHashType,
    BundledAsset,
    asset_path,
    custom_hash,
    is_staged,
    output_hash,
    source_hash,
)

__all__ = [
    "AssetHashType",
    "BundledAsset",
    "asset_path",
    "custom_hash",
    "is_staged",
    "output_hash",
    "source_hash",
]
