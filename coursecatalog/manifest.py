"""
Manifest generation and persistence.

This module manages the file read by the catalog page (default: courses.json):

    {"courses": [...], "generatedAt": "2026-10-19T08:00:00.000Z"}

Every run rebuilds the whole document from a fresh scan and replaces the
previous file in one step; nothing is merged with older manifests.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from coursecatalog.model import Manifest
from coursecatalog.names import CourseNameResolver
from coursecatalog.scan import scan_courses
from coursecatalog.urls import UrlBuilder


logger = logging.getLogger(__name__)

SECTIONS = (
    "finals",
    "midterms",
    "revisionNotes",
    "pastYearZips",
    "problemSheets",
    "lectureNotes",
    "practiceMaterials",
)

# sections keyed by year / practice label; the rest are flat file lists
BUCKET_SECTIONS = ("finals", "midterms", "practiceMaterials")


def _timestamp(now: Optional[datetime] = None) -> str:
    """
    ISO-8601 UTC timestamp with milliseconds and a "Z" suffix.
    """
    dt = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate(
    courses_root: str | Path,
    resolver: Optional[CourseNameResolver] = None,
    urls: Optional[UrlBuilder] = None,
    notes_dir: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Manifest:
    """
    Scan courses_root and wrap the result with a generation timestamp.
    """
    courses = scan_courses(courses_root, resolver=resolver, urls=urls, notes_dir=notes_dir)
    return Manifest(courses=tuple(courses), generated_at=_timestamp(now))


def write_manifest(manifest: Manifest, out_path: str | Path) -> Path:
    """
    Write the manifest as JSON, fully replacing any previous file.

    The document is written to a temporary file in the same directory first,
    so readers never see a half-written manifest.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    text = json.dumps(manifest.to_dict(), ensure_ascii=False, indent=2)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{out.name}.", suffix=".tmp", dir=out.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.write("\n")
        os.replace(tmp_name, out)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Wrote %d courses to %s", len(manifest.courses), out)
    return out


def _file_list(value: Any) -> list[dict[str, Any]]:
    return [x for x in value if isinstance(x, dict)] if isinstance(value, list) else []


def _clean_course(course: dict[str, Any]) -> dict[str, Any]:
    """
    Coerce one loaded course into the manifest shape, dropping entries that are not objects.
    """
    materials = course.get("materials")
    materials = dict(materials) if isinstance(materials, dict) else {}

    for key in SECTIONS:
        value = materials.get(key)
        if key in BUCKET_SECTIONS:
            buckets = value if isinstance(value, dict) else {}
            materials[key] = {
                label: {name: _file_list(refs) for name, refs in bucket.items()}
                for label, bucket in buckets.items()
                if isinstance(bucket, dict)
            }
        else:
            materials[key] = _file_list(value)

    return {**course, "materials": materials}


def load_manifest(path: str | Path) -> dict[str, Any]:
    """
    Load a manifest JSON file.

    Never crashes if the file is missing or broken:
    returns an empty manifest instead.
    """
    empty: dict[str, Any] = {"courses": [], "generatedAt": None}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        return empty
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Could not read manifest %s: %s", path, exc)
        return empty

    if not isinstance(data, dict) or not isinstance(data.get("courses"), list):
        return empty

    # drop non-object courses and file entries
    courses = [_clean_course(c) for c in data["courses"] if isinstance(c, dict)]
    return {**data, "courses": courses}


def summarize(manifest: dict[str, Any]) -> dict[str, int]:
    """
    Count how many courses have a non-empty entry for each material section.
    """
    courses = [c for c in manifest.get("courses", []) if isinstance(c, dict)]
    materials = [c.get("materials") if isinstance(c.get("materials"), dict) else {} for c in courses]
    counts = {"courses": len(courses)}
    for section in SECTIONS:
        counts[section] = sum(1 for m in materials if m.get(section))
    return counts
