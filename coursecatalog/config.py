"""
Settings for manifest generation.

Values are resolved in this order (later wins):
1. defaults below
2. a JSON config file (--config or COURSECATALOG_CONFIG)
3. COURSECATALOG_* environment variables
4. command line flags (applied in cli.py)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from coursecatalog.names import POLICY_PLACEHOLDER, UNKNOWN_NAME_POLICIES


logger = logging.getLogger(__name__)

CONFIG_ENV = "COURSECATALOG_CONFIG"

ENV_VARS = {
    "courses_root": "COURSECATALOG_ROOT",
    "output_path": "COURSECATALOG_OUTPUT",
    "notes_dir": "COURSECATALOG_NOTES_DIR",
    "repo": "COURSECATALOG_REPO",
    "branch": "COURSECATALOG_BRANCH",
    "course_names_path": "COURSECATALOG_NAMES",
    "unknown_name_policy": "COURSECATALOG_UNKNOWN_NAME",
    "log_level": "COURSECATALOG_LOG_LEVEL",
}


@dataclass(frozen=True)
class Settings:
    """
    Holds paths, repository coordinates and policies for one run.
    """

    courses_root: str = "Notes"
    output_path: str = "courses.json"
    # prefix of manifest paths; empty -> name of the courses root folder
    notes_dir: str = ""
    repo: str = "yuhesui/QRSNTU"
    branch: str = "main"
    # empty -> table shipped with the package
    course_names_path: str = ""
    unknown_name_policy: str = POLICY_PLACEHOLDER
    log_level: str = "INFO"

    @property
    def effective_notes_dir(self) -> str:
        return self.notes_dir or Path(self.courses_root).name

    def updated(self, **overrides: Any) -> "Settings":
        """
        Return a copy with all non-None overrides applied.
        """
        values = {k: str(v) for k, v in overrides.items() if v is not None}
        return _validated(replace(self, **values))


def _validated(settings: Settings) -> Settings:
    if settings.unknown_name_policy not in UNKNOWN_NAME_POLICIES:
        logger.warning(
            "Invalid unknown_name_policy %r, using %r", settings.unknown_name_policy, POLICY_PLACEHOLDER
        )
        settings = replace(settings, unknown_name_policy=POLICY_PLACEHOLDER)
    return settings


def _read_config_file(path: Path) -> dict[str, Any]:
    """
    Read a JSON config file. Missing or invalid files are logged and ignored.
    """
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Could not read config file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a JSON object", path)
        return {}
    return data


def load_settings(path: str | Path | None = None, env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from defaults, an optional JSON file and the environment.
    """
    env = os.environ if env is None else env
    known = {f.name for f in fields(Settings)}

    values: dict[str, str] = {}

    config_path = path if path is not None else env.get(CONFIG_ENV)
    if config_path:
        for key, value in _read_config_file(Path(config_path)).items():
            # unknown keys are ignored
            if key in known and value is not None:
                values[key] = str(value)

    for key, var in ENV_VARS.items():
        value = env.get(var, "").strip()
        if value:
            values[key] = value

    return _validated(Settings(**values))
