from __future__ import annotations

from dataclasses import dataclass, field

from devreclaim.models.enums import Category, SafetyLevel


@dataclass(slots=True, frozen=True)
class Finding:
    path: str
    size_bytes: int
    category: Category
    description: str
    safety: SafetyLevel


@dataclass(slots=True, frozen=True)
class CandidateSpec:
    """A resolved Fixed rule: where to look and how to label what is found."""

    path: str
    category: Category
    description: str
    safety: SafetyLevel


@dataclass(slots=True)
class CategoryStats:
    count: int = 0
    size_bytes: int = 0


@dataclass(slots=True)
class FindingBundle:
    findings: list[Finding] = field(default_factory=list)
    # Entries the size accumulator or structural walk could not read.
    skipped_entries: int = 0

    @property
    def total_bytes(self) -> int:
        return sum(item.size_bytes for item in self.findings)

    def by_category(self) -> dict[Category, CategoryStats]:
        stats: dict[Category, CategoryStats] = {}
        for item in self.findings:
            cs = stats.setdefault(item.category, CategoryStats())
            cs.count += 1
            cs.size_bytes += item.size_bytes
        return stats


def sort_findings(findings: list[Finding]) -> list[Finding]:
    """Largest first; ties keep discovery order."""
    return sorted(findings, key=lambda item: item.size_bytes, reverse=True)
