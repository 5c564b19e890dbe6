from __future__ import annotations

import logging
from dataclasses import dataclass

from devreclaim.config.schema import AppConfig, StructuralRule
from devreclaim.models.enums import Category
from devreclaim.models.finding import CandidateSpec
from devreclaim.services.environment import Environment

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class WalkPlan:
    """Structural rules sharing one base directory, walked together once."""

    base: str
    rules: tuple[StructuralRule, ...]

    @property
    def max_depth(self) -> int | None:
        depths = [rule.max_depth for rule in self.rules]
        if any(depth is None for depth in depths):
            return None
        return max(depth for depth in depths if depth is not None)


def in_scope(category: Category, scope: Category | None) -> bool:
    if scope is None:
        return category.in_default_scope
    return category is scope


def resolve_fixed(config: AppConfig, env: Environment, scope: Category | None = None) -> list[CandidateSpec]:
    """Turn the Fixed rule table into concrete paths for this machine."""
    candidates: list[CandidateSpec] = []
    for rule in config.fixed_rules:
        if not in_scope(rule.category, scope) or not rule.applies_to(env.platform):
            continue
        path = env.resolve(rule.template)
        if path is None:
            logger.debug("Unresolved template %s", rule.template)
            continue
        candidates.append(
            CandidateSpec(
                path=path,
                category=rule.category,
                description=rule.description,
                safety=rule.safety,
            )
        )
    return candidates


def resolve_structural(
    config: AppConfig,
    env: Environment,
    scope: Category | None = None,
    scan_root: str | None = None,
) -> list[WalkPlan]:
    """Group Structural rules by the directory each one walks.

    Rules without a ``base`` walk *scan_root* (or the configured default).
    Plans come back in first-seen order so discovery is deterministic.
    """
    default_base = env.resolve(scan_root) if scan_root else env.resolve(config.scan_root)

    grouped: dict[str, list[StructuralRule]] = {}
    for rule in config.structural_rules:
        if not in_scope(rule.category, scope) or not rule.applies_to(env.platform):
            continue
        base = env.resolve(rule.base) if rule.base is not None else default_base
        if base is None:
            logger.debug("Unresolved base for structural rule %s", rule.name_pattern)
            continue
        grouped.setdefault(base, []).append(rule)

    return [WalkPlan(base=base, rules=tuple(rules)) for base, rules in grouped.items()]
