from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from result import Ok, Result

from devreclaim.models.finding import Finding


@dataclass(slots=True, frozen=True)
class RemovalOutcome:
    finding: Finding
    # Ok(freed_bytes) or Err(message).
    result: Result[int, str]

    @property
    def ok(self) -> bool:
        return isinstance(self.result, Ok)


@dataclass(slots=True)
class RemovalSummary:
    outcomes: list[RemovalOutcome] = field(default_factory=list)
    # Only set by the simulator executor's global purge step.
    purge: Result[None, str] | None = None

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.ok)

    @property
    def freed_bytes(self) -> int:
        return sum(outcome.result.unwrap() for outcome in self.outcomes if outcome.ok)


RemovalProgress = Callable[[RemovalOutcome], None]
