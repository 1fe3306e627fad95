"""Tests for rust_lambda_tooling.build.strategy."""

import pytest

from rust_lambda_tooling.build.probe import ToolAvailability
from rust_lambda_tooling.build.strategy import (
    ContainerPlan,
    HostPlan,
    Strategy,
    select_strategy,
)
from rust_lambda_tooling.docker.image import DockerImage


class TestSelectStrategy:
    @pytest.mark.parametrize("availability", list(ToolAvailability))
    def test_forced_container_always_wins(self, availability: ToolAvailability) -> None:
        assert select_strategy(True, availability) is Strategy.RUN_IN_CONTAINER

    def test_unavailable_runs_in_container(self) -> None:
        assert select_strategy(False, ToolAvailability.UNAVAILABLE) is Strategy.RUN_IN_CONTAINER

    def test_unknown_runs_in_container(self) -> None:
        assert select_strategy(False, ToolAvailability.UNKNOWN) is Strategy.RUN_IN_CONTAINER

    def test_available_runs_on_host(self) -> None:
        assert select_strategy(False, ToolAvailability.AVAILABLE) is Strategy.RUN_ON_HOST


class TestPlans:
    def test_plans_carry_their_strategy(self) -> None:
        host = HostPlan(command="cargo lambda build", cwd="/proj", target_platform="linux")
        container = ContainerPlan(
            image=DockerImage.from_registry("dummy"),
            command=("bash", "-c", "cargo lambda build"),
            input_dir="/asset-input",
            output_dir="/asset-output",
        )
        assert host.strategy is Strategy.RUN_ON_HOST
        assert container.strategy is Strategy.RUN_IN_CONTAINER
        assert container.user == "root"

    def test_plans_are_immutable(self) -> None:
        host = HostPlan(command="cargo lambda build", cwd="/proj", target_platform="linux")
        with pytest.raises(AttributeError):
            host.command = "rm -rf /"  # type: ignore[misc]
