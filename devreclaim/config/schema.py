from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from devreclaim.models.enums import Category, Platform, SafetyLevel


def _platforms_to_list(platforms: tuple[Platform, ...]) -> list[str]:
    return [p.value for p in platforms]


def _platforms_from_list(raw: Any) -> tuple[Platform, ...]:
    if not raw:
        return ()
    return tuple(Platform(str(p)) for p in raw)


@dataclass(slots=True, frozen=True)
class FixedRule:
    template: str
    category: Category
    description: str
    safety: SafetyLevel = SafetyLevel.SAFE
    # Empty means every platform.
    platforms: tuple[Platform, ...] = ()

    def applies_to(self, platform: Platform) -> bool:
        return not self.platforms or platform in self.platforms

    def to_dict(self) -> dict[str, Any]:
        return {
            "template": self.template,
            "category": self.category.value,
            "description": self.description,
            "safety": self.safety.value,
            "platforms": _platforms_to_list(self.platforms),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> FixedRule:
        return cls(
            template=str(payload["template"]),
            category=Category(str(payload["category"])),
            description=str(payload["description"]),
            safety=SafetyLevel(str(payload.get("safety", SafetyLevel.SAFE.value))),
            platforms=_platforms_from_list(payload.get("platforms")),
        )


@dataclass(slots=True, frozen=True)
class StructuralRule:
    """Match directories by name (and optionally a marker file beside them).

    ``description`` is a format string receiving ``name`` (the matched
    directory) and ``parent`` (its parent directory's name).
    """

    name_pattern: str
    category: Category
    description: str
    min_bytes: int
    safety: SafetyLevel = SafetyLevel.SAFE
    marker: str | None = None
    # None walks the invocation's scan root.
    base: str | None = None
    max_depth: int | None = None
    platforms: tuple[Platform, ...] = ()

    def applies_to(self, platform: Platform) -> bool:
        return not self.platforms or platform in self.platforms

    def to_dict(self) -> dict[str, Any]:
        return {
            "namePattern": self.name_pattern,
            "category": self.category.value,
            "description": self.description,
            "minBytes": self.min_bytes,
            "safety": self.safety.value,
            "marker": self.marker,
            "base": self.base,
            "maxDepth": self.max_depth,
            "platforms": _platforms_to_list(self.platforms),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> StructuralRule:
        max_depth = payload.get("maxDepth")
        marker = payload.get("marker")
        base = payload.get("base")
        description = str(payload["description"])
        try:
            description.format(name="", parent="")
        except (AttributeError, IndexError, KeyError, ValueError) as exc:
            raise ValueError(
                f"Structural rule description {description!r} may only use {{name}} and {{parent}}"
            ) from exc
        return cls(
            name_pattern=str(payload["namePattern"]),
            category=Category(str(payload["category"])),
            description=description,
            min_bytes=max(0, int(payload.get("minBytes", 0))),
            safety=SafetyLevel(str(payload.get("safety", SafetyLevel.SAFE.value))),
            marker=str(marker) if marker else None,
            base=str(base) if base else None,
            max_depth=int(max_depth) if max_depth is not None else None,
            platforms=_platforms_from_list(payload.get("platforms")),
        )


@dataclass(slots=True)
class AppConfig:
    fixed_rules: list[FixedRule] = field(default_factory=list)
    structural_rules: list[StructuralRule] = field(default_factory=list)
    # Fixed-rule inclusion thresholds; a finding must be strictly larger.
    thresholds: dict[Category, int] = field(default_factory=dict)
    scan_root: str = "{home}/Documents"
    pruned_dir_names: list[str] = field(default_factory=lambda: ["node_modules"])

    def threshold_for(self, category: Category) -> int:
        return self.thresholds.get(category, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "scanRoot": self.scan_root,
            "prunedDirNames": self.pruned_dir_names,
            "thresholds": {cat.value: value for cat, value in self.thresholds.items()},
            "fixedRules": [rule.to_dict() for rule in self.fixed_rules],
            "structuralRules": [rule.to_dict() for rule in self.structural_rules],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], defaults: AppConfig) -> AppConfig:
        # Missing keys fall back to defaults; thresholds merge per category.
        thresholds = dict(defaults.thresholds)
        for cat, value in data.get("thresholds", {}).items():
            thresholds[Category(cat)] = max(0, int(value))

        fixed_raw = data.get("fixedRules")
        if fixed_raw is not None:
            fixed_rules = [FixedRule.from_dict(x) for x in fixed_raw]
        else:
            fixed_rules = list(defaults.fixed_rules)

        structural_raw = data.get("structuralRules")
        if structural_raw is not None:
            structural_rules = [StructuralRule.from_dict(x) for x in structural_raw]
        else:
            structural_rules = list(defaults.structural_rules)

        return cls(
            fixed_rules=fixed_rules,
            structural_rules=structural_rules,
            thresholds=thresholds,
            scan_root=str(data.get("scanRoot", defaults.scan_root)),
            pruned_dir_names=[str(x) for x in data.get("prunedDirNames", defaults.pruned_dir_names)],
        )
