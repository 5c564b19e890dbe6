from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from fnmatch import fnmatchcase

from devreclaim.config.schema import AppConfig, StructuralRule
from devreclaim.models.enums import Category, Platform
from devreclaim.models.finding import Finding, FindingBundle
from devreclaim.services.environment import Environment
from devreclaim.services.fs import DEFAULT_FS, FileSystem
from devreclaim.services.rules import WalkPlan, resolve_fixed, resolve_structural
from devreclaim.services.simulators import SimulatorTool
from devreclaim.services.sizing import measure

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Collector:
    """Accumulates findings keyed by path; the first finding for a path wins."""

    by_path: dict[str, Finding] = field(default_factory=dict)
    skipped: int = 0

    def add(self, finding: Finding) -> None:
        if finding.path in self.by_path:
            logger.debug("Duplicate finding for %s ignored", finding.path)
            return
        self.by_path[finding.path] = finding

    def bundle(self) -> FindingBundle:
        return FindingBundle(findings=list(self.by_path.values()), skipped_entries=self.skipped)


def discover(
    scope: Category | None,
    config: AppConfig,
    env: Environment,
    fs: FileSystem = DEFAULT_FS,
    scan_root: str | None = None,
    simulators: SimulatorTool | None = None,
) -> FindingBundle:
    """Evaluate the rule tables against the filesystem.

    *scope* limits discovery to one category; None means every category in
    the default scope. Missing paths and unreadable entries never abort
    discovery, they only shrink the result (see ``skipped_entries``).
    Findings come back in discovery order; callers sort for display.
    """
    collector = _Collector()

    for candidate in resolve_fixed(config, env, scope):
        if not fs.exists(candidate.path):
            logger.debug("Not found: %s", candidate.path)
            continue
        size = measure(candidate.path, fs)
        collector.skipped += size.skipped
        threshold = config.threshold_for(candidate.category)
        if size.total_bytes <= threshold:
            logger.debug("Below threshold (%d <= %d): %s", size.total_bytes, threshold, candidate.path)
            continue
        collector.add(
            Finding(
                path=candidate.path,
                size_bytes=size.total_bytes,
                category=candidate.category,
                description=candidate.description,
                safety=candidate.safety,
            )
        )

    for plan in resolve_structural(config, env, scope, scan_root):
        _walk_plan(plan, config, fs, collector)

    if scope is Category.SIMULATOR:
        _discover_simulators(config, env, simulators, collector)

    return collector.bundle()


def _match(rules: tuple[StructuralRule, ...], name: str, parent: str, depth: int, fs: FileSystem) -> StructuralRule | None:
    for rule in rules:
        if rule.max_depth is not None and depth > rule.max_depth:
            continue
        if not fnmatchcase(name, rule.name_pattern):
            continue
        if rule.marker is not None and not fs.exists(os.path.join(parent, rule.marker)):
            continue
        return rule
    return None


def _walk_plan(plan: WalkPlan, config: AppConfig, fs: FileSystem, collector: _Collector) -> None:
    """Walk ``plan.base`` once, testing every directory against the plan's rules.

    Each directory is matched before pruning, so hidden names such as
    ``.dart_tool`` can match even though hidden directories are never
    descended into. Matched directories are not descended into either.
    """
    try:
        base_stat = fs.stat(plan.base)
    except OSError:
        logger.debug("Structural base not found: %s", plan.base)
        return
    if not base_stat.is_dir:
        return

    pruned = set(config.pruned_dir_names)
    max_depth = plan.max_depth
    stack: list[tuple[str, int]] = [(plan.base, 0)]
    while stack:
        current, depth = stack.pop()
        try:
            entries = fs.scandir(current)
        except OSError:
            collector.skipped += 1
            continue

        parent_name = os.path.basename(current)
        child_depth = depth + 1
        descend: list[tuple[str, int]] = []
        for entry in sorted(entries, key=lambda e: e.name):
            st = entry.stat
            if st is None:
                collector.skipped += 1
                continue
            if not st.is_dir:
                continue

            rule = _match(plan.rules, entry.name, current, child_depth, fs)
            if rule is not None:
                _accept_structural(rule, entry.path, entry.name, parent_name, fs, collector)
                continue

            if entry.name.startswith(".") or entry.name in pruned:
                continue
            if max_depth is None or child_depth < max_depth:
                descend.append((entry.path, child_depth))
        # Reversed so the stack pops directories in name order.
        stack.extend(reversed(descend))


def _accept_structural(
    rule: StructuralRule,
    path: str,
    name: str,
    parent_name: str,
    fs: FileSystem,
    collector: _Collector,
) -> None:
    size = measure(path, fs)
    collector.skipped += size.skipped
    if size.total_bytes <= rule.min_bytes:
        logger.debug("Below threshold (%d <= %d): %s", size.total_bytes, rule.min_bytes, path)
        return
    collector.add(
        Finding(
            path=path,
            size_bytes=size.total_bytes,
            category=rule.category,
            description=rule.description.format(name=name, parent=parent_name),
            safety=rule.safety,
        )
    )


def _discover_simulators(
    config: AppConfig,
    env: Environment,
    simulators: SimulatorTool | None,
    collector: _Collector,
) -> None:
    if env.platform is not Platform.DARWIN or simulators is None:
        return
    listed = simulators.list_runtimes()
    if listed.is_err():
        logger.warning("Could not list simulator runtimes: %s", listed.unwrap_err())
        return
    threshold = config.threshold_for(Category.SIMULATOR)
    for runtime in listed.unwrap():
        if not runtime.deletable or runtime.size_bytes <= threshold:
            continue
        collector.add(runtime.to_finding())
