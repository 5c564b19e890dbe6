from __future__ import annotations

import logging

from result import Err, Ok

from devreclaim.models.finding import Finding
from devreclaim.models.removal import RemovalOutcome, RemovalProgress, RemovalSummary
from devreclaim.services.fs import DEFAULT_FS, FileSystem
from devreclaim.services.simulators import SimulatorTool

logger = logging.getLogger(__name__)


def _record(summary: RemovalSummary, outcome: RemovalOutcome, progress: RemovalProgress | None) -> None:
    summary.outcomes.append(outcome)
    if outcome.ok:
        logger.info("Removed %s", outcome.finding.path)
    else:
        logger.warning("Failed to remove %s: %s", outcome.finding.path, outcome.result.unwrap_err())
    if progress is not None:
        progress(outcome)


def execute(
    findings: list[Finding],
    fs: FileSystem = DEFAULT_FS,
    progress: RemovalProgress | None = None,
) -> RemovalSummary:
    """Delete each finding in order, recording one outcome per item.

    A failure never stops the batch and nothing is retried or rolled back.
    Sizes come from discovery; paths are not re-measured before deletion.
    """
    summary = RemovalSummary()
    for finding in findings:
        try:
            fs.remove_tree(finding.path)
        except OSError as exc:
            outcome = RemovalOutcome(finding, Err(str(exc)))
        else:
            outcome = RemovalOutcome(finding, Ok(finding.size_bytes))
        _record(summary, outcome, progress)
    return summary


def execute_simulators(
    findings: list[Finding],
    tool: SimulatorTool,
    progress: RemovalProgress | None = None,
) -> RemovalSummary:
    """Remove simulator runtimes through *tool* instead of the filesystem.

    Unavailable devices are purged once up front; that step's result is kept
    on the summary and a failure there does not stop the per-runtime deletes.
    """
    summary = RemovalSummary()
    summary.purge = tool.delete_unavailable()
    if summary.purge.is_err():
        logger.warning("Purging unavailable simulators failed: %s", summary.purge.unwrap_err())

    for finding in findings:
        deleted = tool.delete_runtime(finding.path)
        if deleted.is_ok():
            outcome = RemovalOutcome(finding, Ok(finding.size_bytes))
        else:
            outcome = RemovalOutcome(finding, Err(deleted.unwrap_err()))
        _record(summary, outcome, progress)
    return summary
