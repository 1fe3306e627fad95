"""Pytest fixtures for rust-lambda tooling tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from rust_lambda_tooling.build.probe import (
    TOOL_AVAILABILITY,
    ToolAvailability,
    ToolAvailabilityCache,
)


@pytest.fixture(autouse=True)
def _isolate_availability(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Fresh process-wide probe cache and no forced-docker env for every test."""
    monkeypatch.delenv("RUST_LAMBDA_FORCE_DOCKER", raising=False)
    TOOL_AVAILABILITY.reset()
    yield
    TOOL_AVAILABILITY.reset()


@pytest.fixture
def crate(tmp_path: Path) -> Path:
    """Minimal Rust crate: Cargo.toml + src/main.rs. Returns the crate directory."""
    root = tmp_path / "handler"
    (root / "src").mkdir(parents=True)
    (root / "Cargo.toml").write_text('[package]\nname = "handler"\nversion = "0.1.0"\n')
    (root / "src" / "main.rs").write_text("fn main() {}\n")
    return root


@pytest.fixture
def available() -> ToolAvailabilityCache:
    return ToolAvailabilityCache(probe_fn=lambda: ToolAvailability.AVAILABLE)


@pytest.fixture
def unavailable() -> ToolAvailabilityCache:
    return ToolAvailabilityCache(probe_fn=lambda: ToolAvailability.UNAVAILABLE)
