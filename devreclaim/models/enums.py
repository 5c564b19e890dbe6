from __future__ import annotations

import sys
from enum import Enum


class Category(str, Enum):
    ANTIGRAVITY = "antigravity"
    FLUTTER = "flutter"
    XCODE = "xcode"
    ANDROID = "android"
    VSCODE = "vscode"
    SIMULATOR = "simulator"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @property
    def in_default_scope(self) -> bool:
        # Simulator runtimes are managed by xcrun, not plain directories, so
        # they only show up when asked for explicitly.
        return self is not Category.SIMULATOR


_CATEGORY_LABELS: dict[Category, str] = {
    Category.ANTIGRAVITY: "Antigravity",
    Category.FLUTTER: "Flutter",
    Category.XCODE: "Xcode",
    Category.ANDROID: "Android",
    Category.VSCODE: "VS Code",
    Category.SIMULATOR: "Simulator",
}


class SafetyLevel(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    WARNING = "warning"

    @property
    def icon(self) -> str:
        return _SAFETY_ICONS[self]

    @property
    def style(self) -> str:
        return _SAFETY_STYLES[self]


_SAFETY_ICONS: dict[SafetyLevel, str] = {
    SafetyLevel.SAFE: "✓",
    SafetyLevel.CAUTION: "⚠",
    SafetyLevel.WARNING: "⛔",
}

_SAFETY_STYLES: dict[SafetyLevel, str] = {
    SafetyLevel.SAFE: "green",
    SafetyLevel.CAUTION: "dark_orange",
    SafetyLevel.WARNING: "red",
}


class Platform(str, Enum):
    DARWIN = "darwin"
    LINUX = "linux"
    WINDOWS = "windows"
    OTHER = "other"

    @classmethod
    def current(cls) -> Platform:
        return cls.from_sys(sys.platform)

    @classmethod
    def from_sys(cls, value: str) -> Platform:
        if value == "darwin":
            return cls.DARWIN
        if value.startswith("linux"):
            return cls.LINUX
        if value in ("win32", "cygwin"):
            return cls.WINDOWS
        return cls.OTHER
