"""
Central data model definitions used across the project.

This module defines the canonical structure of the manifest so that:
- the scanner, the writer and the CLI share the same field names
- the JSON keys expected by the catalog page live in exactly one place
- records are immutable once a course folder has been scanned
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FileRef:
    """
    One downloadable file (PDF or ZIP) inside the notes tree.
    """

    name: str
    path: str
    download_url: str
    material_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "path": self.path,
            "downloadUrl": self.download_url,
        }
        if self.material_type:
            out["materialType"] = self.material_type
        return out


def _refs(items: Tuple[FileRef, ...]) -> list[Dict[str, Any]]:
    return [x.to_dict() for x in items]


@dataclass(frozen=True)
class ExamYear:
    """
    Files of one academic year inside a Finals or Midterms folder.
    """

    papers: Tuple[FileRef, ...] = ()
    solutions: Tuple[FileRef, ...] = ()
    reports: Tuple[FileRef, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "papers": _refs(self.papers),
            "solutions": _refs(self.solutions),
            "reports": _refs(self.reports),
        }


@dataclass(frozen=True)
class PracticeSet:
    """
    Files of one practice set ("Practice 1", "Practice", ...).
    """

    papers: Tuple[FileRef, ...] = ()
    solutions: Tuple[FileRef, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "papers": _refs(self.papers),
            "solutions": _refs(self.solutions),
        }


@dataclass(frozen=True)
class Materials:
    """
    Everything found for one course, already sorted into buckets.
    """

    finals: Mapping[str, ExamYear] = field(default_factory=dict)
    midterms: Mapping[str, ExamYear] = field(default_factory=dict)
    revision_notes: Tuple[FileRef, ...] = ()
    past_year_zips: Tuple[FileRef, ...] = ()
    problem_sheets: Tuple[FileRef, ...] = ()
    lecture_notes: Tuple[FileRef, ...] = ()
    practice_materials: Mapping[str, PracticeSet] = field(default_factory=dict)
    # "(AYxx-yy)" of the problem sheet / lecture note folders, if any
    problem_sheets_year: Optional[str] = None
    lecture_notes_year: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "finals": {year: bucket.to_dict() for year, bucket in self.finals.items()},
            "midterms": {year: bucket.to_dict() for year, bucket in self.midterms.items()},
            "revisionNotes": _refs(self.revision_notes),
            "pastYearZips": _refs(self.past_year_zips),
            "problemSheets": _refs(self.problem_sheets),
            "lectureNotes": _refs(self.lecture_notes),
            "practiceMaterials": {label: ps.to_dict() for label, ps in self.practice_materials.items()},
        }
        if self.problem_sheets_year:
            out["problemSheetsYear"] = self.problem_sheets_year
        if self.lecture_notes_year:
            out["lectureNotesYear"] = self.lecture_notes_year
        return out


@dataclass(frozen=True)
class CourseRecord:
    """
    Represents one course folder as stored in the manifest.
    """

    code: str
    name: str
    materials: Materials
    folder_name: str = ""
    github_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"code": self.code, "name": self.name}
        if self.folder_name:
            out["folderName"] = self.folder_name
        if self.github_url:
            out["githubUrl"] = self.github_url
        out["materials"] = self.materials.to_dict()
        return out


@dataclass(frozen=True)
class Manifest:
    """
    The complete generated document: all courses plus a generation timestamp.
    """

    courses: Tuple[CourseRecord, ...]
    generated_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "courses": [c.to_dict() for c in self.courses],
            "generatedAt": self.generated_at,
        }
