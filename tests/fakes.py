from __future__ import annotations

from result import Err, Ok, Result

from devreclaim.services.simulators import SimulatorRuntime


class FakeSimulatorTool:
    def __init__(
        self,
        runtimes: list[SimulatorRuntime] | None = None,
        list_error: str | None = None,
        purge_error: str | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.runtimes = runtimes or []
        self.list_error = list_error
        self.purge_error = purge_error
        self.failing = failing or set()
        self.calls: list[str] = []

    def list_runtimes(self) -> Result[list[SimulatorRuntime], str]:
        self.calls.append("list")
        if self.list_error is not None:
            return Err(self.list_error)
        return Ok(list(self.runtimes))

    def delete_unavailable(self) -> Result[None, str]:
        self.calls.append("delete unavailable")
        if self.purge_error is not None:
            return Err(self.purge_error)
        return Ok(None)

    def delete_runtime(self, identifier: str) -> Result[None, str]:
        self.calls.append(f"delete {identifier}")
        if identifier in self.failing:
            return Err(f"cannot delete {identifier}")
        return Ok(None)
