"""Bundling image descriptor: built from the packaged context, or a plain registry reference."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from rust_lambda_tooling.errors import BuildFailure
from rust_lambda_tooling.helpers import fingerprint_directory

log = logging.getLogger(__name__)

# Dockerfile with rustup, both Lambda targets and cargo-lambda preinstalled.
BUNDLING_IMAGE_CONTEXT = Path(__file__).resolve().parent / "context"
IMAGE_NAME_PREFIX = "rust-lambda-bundling"
# Never pulled or run: stands in for the image when the host is expected to build.
PLACEHOLDER_IMAGE = "dummy"


@dataclass
class DockerImage:
    image: str
    build_context: Path | None = None
    build_args: Mapping[str, str] = field(default_factory=dict)
    _built: bool = field(default=False, repr=False, compare=False)

    @classmethod
    def from_registry(cls, image: str) -> DockerImage:
        return cls(image=image, _built=True)

    @classmethod
    def from_build(
        cls,
        path: Path = BUNDLING_IMAGE_CONTEXT,
        build_args: Mapping[str, str] | None = None,
    ) -> DockerImage:
        """Image tagged by a fingerprint of the context and build args. No platform is pinned."""
        args = dict(build_args or {})
        extra = "\n".join(f"{k}={v}" for k, v in sorted(args.items()))
        tag = f"{IMAGE_NAME_PREFIX}:{fingerprint_directory(path, extra=extra)[:16]}"
        return cls(image=tag, build_context=path, build_args=args)

    def build_command(self) -> list[str]:
        """docker build argv for this image (empty for registry images)."""
        if self.build_context is None:
            return []
        cmd = ["docker", "build", "-t", self.image]
        for k, v in sorted(self.build_args.items()):
            cmd += ["--build-arg", f"{k}={v}"]
        cmd.append(str(self.build_context))
        return cmd

    def ensure_built(self) -> str:
        """Build once per descriptor; return the image reference. Raises BuildFailure on docker errors."""
        if self._built:
            return self.image
        cmd = self.build_command()
        print(f"🔨 Building bundling image {self.image}...")
        log.debug("Running: %s", " ".join(cmd))
        r = subprocess.run(cmd)
        if r.returncode != 0:
            msg = f"docker build failed for {self.image} (status {r.returncode})"
            raise BuildFailure(msg, returncode=r.returncode)
        self._built = True
        return self.image
