"""Docker side of bundling: the bundling image and the container runner."""

from .image import BUNDLING_IMAGE_CONTEXT, PLACEHOLDER_IMAGE, DockerImage
from .run import docker_run_args, run_container_plan

__all__ = [
    "BUNDLING_IMAGE_CONTEXT",
    "PLACEHOLDER_IMAGE",
    "DockerImage",
    "docker_run_args",
    "run_container_plan",
]
