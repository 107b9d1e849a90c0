"""
Course code -> human readable course title.

The lookup table lives in a JSON file (default: coursecatalog/data/course_names.json)
so new course codes can be added without touching the scanner:

    {"MH1100": "Calculus I", "HE1002": "Macroeconomics I", ...}

Unknown codes are handled by a policy:
- "placeholder": use the fixed title "Unknown Course"
- "folder":      use the raw course folder name
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping, Optional


logger = logging.getLogger(__name__)

UNKNOWN_COURSE = "Unknown Course"
POLICY_PLACEHOLDER = "placeholder"
POLICY_FOLDER = "folder"
UNKNOWN_NAME_POLICIES = (POLICY_PLACEHOLDER, POLICY_FOLDER)


def default_names_path() -> Path:
    """
    Return the path of the course name table shipped with the package.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "course_names.json"


def load_course_names(path: str | Path | None = None) -> dict[str, str]:
    """
    Load the course name table.

    Returns an empty dict if the file does not exist or is invalid,
    so a broken table never stops manifest generation.
    """
    names_path = Path(path) if path is not None else default_names_path()

    if not names_path.exists():
        logger.warning("Course name table not found: %s", names_path)
        return {}

    try:
        data = json.loads(names_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Could not read course name table %s: %s", names_path, exc)
        return {}

    if not isinstance(data, dict):
        logger.warning("Course name table %s is not a JSON object", names_path)
        return {}

    # normalize: strip + uppercase codes, ignore non-strings
    out: dict[str, str] = {}
    for code, title in data.items():
        if isinstance(code, str) and isinstance(title, str):
            key = code.strip().upper()
            if key and title.strip():
                out[key] = title.strip()
    return out


class CourseNameResolver:
    """
    Resolves course codes against an injected name table.
    """

    def __init__(self, names: Optional[Mapping[str, str]] = None, unknown_policy: str = POLICY_PLACEHOLDER) -> None:
        if unknown_policy not in UNKNOWN_NAME_POLICIES:
            raise ValueError(f"Unknown name policy: {unknown_policy!r}")
        self._names = dict(names or {})
        self.unknown_policy = unknown_policy

    def resolve(self, code: object, folder_name: Optional[str] = None) -> str:
        """
        Return the registered title for code, or the fallback for unknown codes.

        Never raises, whatever code looks like.
        """
        key = code.strip().upper() if isinstance(code, str) else ""
        title = self._names.get(key) if key else None
        if title:
            return title
        if self.unknown_policy == POLICY_FOLDER:
            return folder_name or key or UNKNOWN_COURSE
        return UNKNOWN_COURSE
