"""Asset hashing and staging.

A bundled asset lives in <staging_dir>/asset.<hash>. With the source hash type the
hash is known before building, so an existing non-empty asset directory means the
Rust compiler does not need to run again. Builds always write to a temporary
directory that is only renamed into place after success.
"""

from __future__ import annotations

import hashlib
import json
import logging
import shutil
import tempfile
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from rust_lambda_tooling.errors import ConfigurationError
from rust_lambda_tooling.helpers import DEFAULT_FINGERPRINT_EXCLUDE, fingerprint_directory

log = logging.getLogger(__name__)

ASSET_DIR_PREFIX = "asset."


class AssetHashType(Enum):
    SOURCE = "source"
    OUTPUT = "output"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: str | AssetHashType | None) -> AssetHashType:
        if value is None:
            return cls.SOURCE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            msg = f"Unknown asset hash type: {value}. Use source, output, or custom."
            raise ConfigurationError(msg) from None


@dataclass(frozen=True)
class BundledAsset:
    asset_hash: str
    path: Path
    hash_type: AssetHashType
    skipped: bool = False


def bundling_fingerprint(options: Mapping[str, object]) -> str:
    """Stable text for the options that change the build output (target, bin, environment)."""
    return json.dumps(options, sort_keys=True, default=str)


def source_hash(
    entry: Path, options: Mapping[str, object], *, skip: Iterable[str] = ()
) -> str:
    """Fingerprint of the crate sources plus build options. skip adds entry-relative paths to ignore."""
    exclude = DEFAULT_FINGERPRINT_EXCLUDE | set(skip)
    return fingerprint_directory(entry, exclude=exclude, extra=bundling_fingerprint(options))


def custom_hash(asset_hash: str | None) -> str:
    if not asset_hash:
        msg = "asset_hash is required when asset_hash_type is custom"
        raise ConfigurationError(msg)
    return hashlib.sha256(asset_hash.encode()).hexdigest()


def output_hash(out_dir: Path) -> str:
    return fingerprint_directory(out_dir, exclude=())


def asset_path(staging_dir: Path, asset_hash: str) -> Path:
    return staging_dir / f"{ASSET_DIR_PREFIX}{asset_hash}"


def is_staged(path: Path) -> bool:
    """True when path is a directory with at least one entry."""
    return path.is_dir() and any(path.iterdir())


def make_temp_output(staging_dir: Path) -> Path:
    staging_dir.mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix="bundling-temp-", dir=staging_dir))


def publish(temp_dir: Path, target: Path) -> Path:
    """Move a finished build into its asset directory, replacing an empty or stale one."""
    if target.exists():
        shutil.rmtree(target)
    temp_dir.rename(target)
    log.debug("Staged asset at %s", target)
    return target


def discard(temp_dir: Path) -> None:
    shutil.rmtree(temp_dir, ignore_errors=True)
