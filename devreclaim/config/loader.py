from __future__ import annotations

import json

from result import Err, Ok, Result

from devreclaim.config.defaults import default_config
from devreclaim.config.schema import AppConfig
from devreclaim.services.fs import DEFAULT_FS, FileSystem


def load_config(path: str | None = None, fs: FileSystem = DEFAULT_FS) -> Result[AppConfig, str]:
    """Load rule overrides from *path*; with no path the built-in defaults are used.

    A path given explicitly must exist.
    """
    if path is None:
        return Ok(default_config())

    resolved = fs.expanduser(path)
    if not fs.exists(resolved):
        return Err(f"Config not found: {resolved}")

    try:
        payload = json.loads(fs.read_text(resolved))
        if not isinstance(payload, dict):
            return Err(f"Config at {resolved} must be a JSON object.")
        return Ok(AppConfig.from_dict(payload, default_config()))
    except Exception as exc:  # noqa: BLE001
        return Err(f"Failed reading config at {resolved}: {exc}.")
