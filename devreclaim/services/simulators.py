from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from typing import Any, Protocol

from result import Err, Ok, Result

from devreclaim.models.enums import Category, SafetyLevel
from devreclaim.models.finding import Finding

logger = logging.getLogger(__name__)

_PLATFORM_NAMES = {
    "com.apple.platform.iphonesimulator": "iOS",
    "com.apple.platform.watchsimulator": "watchOS",
    "com.apple.platform.appletvsimulator": "tvOS",
    "com.apple.platform.xrsimulator": "visionOS",
}


@dataclass(slots=True, frozen=True)
class SimulatorRuntime:
    identifier: str
    name: str
    size_bytes: int
    deletable: bool

    def to_finding(self) -> Finding:
        # The runtime identifier stands in for a path: `simctl runtime delete` takes it.
        return Finding(
            path=self.identifier,
            size_bytes=self.size_bytes,
            category=Category.SIMULATOR,
            description=self.name,
            safety=SafetyLevel.WARNING,
        )


class SimulatorTool(Protocol):
    def list_runtimes(self) -> Result[list[SimulatorRuntime], str]: ...

    def delete_unavailable(self) -> Result[None, str]: ...

    def delete_runtime(self, identifier: str) -> Result[None, str]: ...


def parse_runtime_list(payload: dict[str, Any]) -> list[SimulatorRuntime]:
    """Parse ``xcrun simctl runtime list -j`` output (a dict keyed by identifier)."""
    runtimes: list[SimulatorRuntime] = []
    for key, raw in payload.items():
        if not isinstance(raw, dict):
            continue
        identifier = str(raw.get("identifier", key))
        platform = _PLATFORM_NAMES.get(str(raw.get("platformIdentifier", "")), "Simulator")
        version = str(raw.get("version", "")).strip()
        build = str(raw.get("build", "")).strip()
        name = f"{platform} {version}".strip()
        if build:
            name = f"{name} ({build})"
        runtimes.append(
            SimulatorRuntime(
                identifier=identifier,
                name=f"Runtime: {name}",
                size_bytes=max(0, int(raw.get("sizeBytes", 0))),
                deletable=bool(raw.get("deletable", False)),
            )
        )
    return runtimes


class XcrunSimulatorTool:
    """Runs ``xcrun simctl`` synchronously, one call at a time."""

    def __init__(self, executable: str = "xcrun") -> None:
        self._executable = executable

    def _run(self, *args: str) -> Result[str, str]:
        command = [self._executable, "simctl", *args]
        logger.debug("Running %s", " ".join(command))
        try:
            completed = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            return Err(f"{self._executable} unavailable: {exc}")
        if completed.returncode != 0:
            detail = completed.stderr.strip() or f"exit status {completed.returncode}"
            return Err(detail)
        return Ok(completed.stdout)

    def list_runtimes(self) -> Result[list[SimulatorRuntime], str]:
        output = self._run("runtime", "list", "-j")
        if output.is_err():
            return Err(output.unwrap_err())
        try:
            payload = json.loads(output.unwrap())
        except json.JSONDecodeError as exc:
            return Err(f"Unexpected simctl output: {exc}")
        if not isinstance(payload, dict):
            return Err("Unexpected simctl output: expected a JSON object.")
        try:
            return Ok(parse_runtime_list(payload))
        except (TypeError, ValueError) as exc:
            return Err(f"Unexpected simctl output: {exc}")

    def delete_unavailable(self) -> Result[None, str]:
        return self._run("delete", "unavailable").map(lambda _: None)

    def delete_runtime(self, identifier: str) -> Result[None, str]:
        return self._run("runtime", "delete", identifier).map(lambda _: None)
