from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from result import Err, Ok, Result

from devreclaim.models.enums import Platform

_TOKEN_RE = re.compile(r"\{(\w+)\}")


@dataclass(slots=True, frozen=True)
class Environment:
    """Process-wide lookups (home, platform, env vars) captured once.

    Rules are resolved against this object instead of ``os.environ`` so tests
    can hand discovery a fake machine.
    """

    home: str
    platform: Platform
    env: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def current(cls) -> Result[Environment, str]:
        try:
            home = str(Path.home())
        except (KeyError, RuntimeError) as exc:
            return Err(f"Cannot resolve home directory: {exc}")
        if not home:
            return Err("Cannot resolve home directory.")
        return Ok(cls(home=home, platform=Platform.current(), env=dict(os.environ)))

    def variables(self) -> dict[str, str]:
        """Values available to ``{token}`` placeholders in rule templates."""
        values = {"home": self.home}
        config_dir = self.env.get("XDG_CONFIG_HOME") or os.path.join(self.home, ".config")
        values["config"] = config_dir
        for token, name in (("appdata", "APPDATA"), ("localappdata", "LOCALAPPDATA")):
            raw = self.env.get(name)
            if raw:
                values[token] = raw
        return values

    def resolve(self, template: str) -> str | None:
        """Expand a rule template, or return None if a token has no value."""
        values = self.variables()
        missing = False

        def _sub(match: re.Match[str]) -> str:
            nonlocal missing
            value = values.get(match.group(1))
            if value is None:
                missing = True
                return ""
            return value

        expanded = _TOKEN_RE.sub(_sub, template)
        if missing:
            return None
        if expanded.startswith("~"):
            expanded = self.home + expanded[1:]
        return os.path.normpath(expanded)
