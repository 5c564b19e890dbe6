from __future__ import annotations

from devreclaim.config.schema import AppConfig, FixedRule, StructuralRule
from devreclaim.models.enums import Category, Platform, SafetyLevel

MB = 1024 * 1024
GB = 1024 * MB

_DARWIN = (Platform.DARWIN,)
_LINUX = (Platform.LINUX,)
_WINDOWS = (Platform.WINDOWS,)

SAFE = SafetyLevel.SAFE
CAUTION = SafetyLevel.CAUTION
WARNING = SafetyLevel.WARNING

_MAC_SUPPORT = "{home}/Library/Application Support"
_GEMINI = "{home}/.gemini/antigravity"


def _antigravity_rules() -> list[FixedRule]:
    ag = Category.ANTIGRAVITY
    rules = [
        FixedRule(f"{_GEMINI}/browser_recordings", ag, "Session recordings", SAFE),
        FixedRule(f"{_GEMINI}/conversations", ag, "Conversation history", CAUTION),
        FixedRule(f"{_GEMINI}/brain", ag, "AI memory cache", CAUTION),
        FixedRule(f"{_GEMINI}/implicit", ag, "Implicit data cache", SAFE, _DARWIN),
        FixedRule(f"{_MAC_SUPPORT}/Antigravity/CachedData", ag, "JS/WASM cached data", SAFE, _DARWIN),
        FixedRule(f"{_MAC_SUPPORT}/Antigravity/Code Cache", ag, "Code cache", SAFE, _DARWIN),
        FixedRule(
            f"{_MAC_SUPPORT}/Antigravity/User/_extensions-disabled",
            ag,
            "Disabled extensions backup",
            SAFE,
            _DARWIN,
        ),
        FixedRule(f"{_MAC_SUPPORT}/Antigravity/DawnWebGPUCache", ag, "WebGPU cache", SAFE, _DARWIN),
        FixedRule(f"{_MAC_SUPPORT}/Antigravity/DawnGraphiteCache", ag, "Graphite cache", SAFE, _DARWIN),
        FixedRule(f"{_MAC_SUPPORT}/Antigravity/User/workspaceStorage", ag, "Workspace storage", CAUTION, _DARWIN),
        FixedRule("{home}/.antigravity/extensions", ag, "Old extension versions", SAFE, _DARWIN),
        FixedRule("{appdata}/Antigravity/CachedData", ag, "Cached data", SAFE, _WINDOWS),
        FixedRule("{appdata}/Antigravity/Code Cache", ag, "Code cache", SAFE, _WINDOWS),
        FixedRule("{localappdata}/Antigravity/CachedData", ag, "Local cached data", SAFE, _WINDOWS),
        FixedRule("{config}/Antigravity/CachedData", ag, "Cached data", SAFE, _LINUX),
        FixedRule("{config}/Antigravity/Code Cache", ag, "Code cache", SAFE, _LINUX),
    ]
    return rules


def _xcode_rules() -> list[FixedRule]:
    xc = Category.XCODE
    dev = "{home}/Library/Developer"
    return [
        FixedRule(f"{dev}/Xcode/DerivedData", xc, "Xcode DerivedData", SAFE, _DARWIN),
        FixedRule(f"{dev}/Xcode/iOS DeviceSupport", xc, "iOS DeviceSupport", SAFE, _DARWIN),
        FixedRule(f"{dev}/Xcode/watchOS DeviceSupport", xc, "watchOS DeviceSupport", SAFE, _DARWIN),
        FixedRule(f"{dev}/Xcode/Archives", xc, "Xcode Archives", CAUTION, _DARWIN),
        FixedRule(f"{dev}/CoreSimulator/Caches", xc, "Simulator Caches", SAFE, _DARWIN),
    ]


def _android_rules() -> list[FixedRule]:
    an = Category.ANDROID
    return [
        FixedRule("{home}/.gradle/caches", an, "Gradle caches", SAFE),
        FixedRule("{home}/.gradle/wrapper/dists", an, "Gradle distributions", CAUTION),
        FixedRule("{home}/.android/cache", an, "Android SDK cache", SAFE),
    ]


_VSCODE_CACHE_SUBDIRS = ("CachedData", "Code Cache", "CachedExtensions", "CachedExtensionVSIXs")

_VSCODE_BASES: tuple[tuple[str, tuple[Platform, ...]], ...] = (
    (f"{_MAC_SUPPORT}/Code", _DARWIN),
    (f"{_MAC_SUPPORT}/Cursor", _DARWIN),
    ("{appdata}/Code", _WINDOWS),
    ("{appdata}/Cursor", _WINDOWS),
    ("{config}/Code", _LINUX),
    ("{config}/Cursor", _LINUX),
)


def _vscode_rules() -> list[FixedRule]:
    rules: list[FixedRule] = []
    for base, platforms in _VSCODE_BASES:
        editor = base.rsplit("/", 1)[-1]
        for subdir in _VSCODE_CACHE_SUBDIRS:
            rules.append(FixedRule(f"{base}/{subdir}", Category.VSCODE, f"{editor} {subdir}", SAFE, platforms))
    return rules


def _flutter_rules() -> list[FixedRule]:
    return [FixedRule("{home}/.pub-cache", Category.FLUTTER, "Pub package cache", CAUTION)]


def _structural_rules() -> list[StructuralRule]:
    return [
        StructuralRule(
            name_pattern="build",
            category=Category.FLUTTER,
            description="Build directory: {parent}",
            min_bytes=100 * MB,
            marker="pubspec.yaml",
        ),
        StructuralRule(
            name_pattern=".dart_tool",
            category=Category.FLUTTER,
            description=".dart_tool: {parent}",
            min_bytes=50 * MB,
        ),
        StructuralRule(
            name_pattern="*.avd",
            category=Category.ANDROID,
            description="AVD: {name}",
            min_bytes=1 * GB,
            safety=WARNING,
            base="{home}/.android/avd",
            max_depth=1,
        ),
    ]


def default_config() -> AppConfig:
    return AppConfig(
        fixed_rules=[
            *_antigravity_rules(),
            *_flutter_rules(),
            *_xcode_rules(),
            *_android_rules(),
            *_vscode_rules(),
        ],
        structural_rules=_structural_rules(),
        thresholds={
            Category.ANTIGRAVITY: 0,
            Category.FLUTTER: 100 * MB,
            Category.XCODE: 100 * MB,
            Category.ANDROID: 100 * MB,
            Category.VSCODE: 50 * MB,
            Category.SIMULATOR: 0,
        },
        scan_root="{home}/Documents",
        pruned_dir_names=["node_modules"],
    )
