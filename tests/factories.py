from __future__ import annotations

from devreclaim.models.enums import Category, Platform, SafetyLevel
from devreclaim.models.finding import Finding
from devreclaim.services.environment import Environment

MB = 1024 * 1024
GB = 1024 * MB


def make_finding(
    path: str,
    size: int,
    safety: SafetyLevel = SafetyLevel.SAFE,
    category: Category = Category.ANTIGRAVITY,
    description: str | None = None,
) -> Finding:
    return Finding(
        path=path,
        size_bytes=size,
        category=category,
        description=description or path.rsplit("/", 1)[-1],
        safety=safety,
    )


def make_env(
    platform: Platform = Platform.LINUX,
    home: str = "/home/dev",
    env: dict[str, str] | None = None,
) -> Environment:
    return Environment(home=home, platform=platform, env=env or {})
