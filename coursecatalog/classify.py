"""
Classification (file/folder names -> labels).

- Extracts the academic year ("23-24") from exam file names
- Labels the material type of a file (question paper, solution, report)
- Labels the role of a course subfolder (Finals, Midterms, Practice, ...)
- Extracts practice-set and weekly identifiers used for grouping

Important rules (DO NOT CHANGE):
- Rules are evaluated in list order, first match wins
- Nothing in here touches the filesystem and nothing raises on odd input
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from coursecatalog.model import FileRef


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

QUESTION_PAPER = "QuestionPaper"
EXAMINER_REPORT = "ExaminerReport"
SOLUTION_OFFICIAL = "SolutionOfficial"
SOLUTION_BY_QRS = "SolutionByQRS"
SOLUTION_UNOFFICIAL = "SolutionUnofficial"
SOLUTION_HANDWRITTEN = "SolutionHandwritten"
OTHER = "Other"

FOLDER_PRACTICE = "Practice"
FOLDER_FINALS = "Finals"
FOLDER_MIDTERMS = "Midterms"
FOLDER_PROBLEM_SHEETS = "ProblemSheets"
FOLDER_LECTURE_NOTES = "LectureNotes"
FOLDER_NOT_APPLICABLE = "NotApplicable"

UNCATEGORIZED = "Uncategorized"

Rule = Tuple[Callable[[str], bool], str]


def _contains(*needles: str) -> Callable[[str], bool]:
    return lambda name: any(n in name for n in needles)


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

# QuestionPaper must stay ahead of Solution: a name carrying both
# tokens is a question paper.
MATERIAL_RULES: List[Rule] = [
    (_contains("QuestionPaper"), QUESTION_PAPER),
    (_contains("Examiner's Report", "ExaminersReport"), EXAMINER_REPORT),
    (_contains("Solution"), SOLUTION_OFFICIAL),
]

SOLUTION_RULES: List[Rule] = [
    (_contains("by QRS"), SOLUTION_BY_QRS),
    (_contains("Unofficial"), SOLUTION_UNOFFICIAL),
    (_contains("Handwritten"), SOLUTION_HANDWRITTEN),
]

# Practice first, so "HE1002 - Macroeconomics I - Finals - Practice"
# never lands in the finals buckets.
FOLDER_RULES: List[Rule] = [
    (_contains("Practice"), FOLDER_PRACTICE),
    (_contains("Finals"), FOLDER_FINALS),
    (_contains("Midterm"), FOLDER_MIDTERMS),
    (_contains("Problem Sheets"), FOLDER_PROBLEM_SHEETS),
    (_contains("Lecture Notes"), FOLDER_LECTURE_NOTES),
]

_YEAR_RE = re.compile(r"_(\d{2}-\d{2})_")
_PATH_YEAR_RE = re.compile(r"\(AY(\d{2}-\d{2})\)")
_PRACTICE_RE = re.compile(r"_Practice\s*(\d+)[_. ]")
_IDENTIFIER_RE = re.compile(r"_(Week \d+|Problem[_ ]?Sheet[_ ]?\d*|Lecture[_ ]?\d+|\d+)_")


def first_match(rules: Iterable[Rule], name: str, default: str) -> str:
    """
    Return the label of the first rule whose predicate accepts name.
    """
    for predicate, label in rules:
        if predicate(name):
            return label
    return default


# ---------------------------------------------------------------------------
# File names
# ---------------------------------------------------------------------------


def extract_academic_year(name: str) -> Optional[str]:
    """
    Extract "YY-YY" from names like "MH1100_23-24_Finals_QuestionPaper.pdf".
    """
    match = _YEAR_RE.search(name or "")
    return match.group(1) if match else None


def extract_material_type(name: str) -> str:
    """
    Label a file name with one of the material types.

    Solutions are refined into official / by QRS / unofficial / handwritten.
    """
    name = name or ""
    label = first_match(MATERIAL_RULES, name, OTHER)
    if label == SOLUTION_OFFICIAL:
        return first_match(SOLUTION_RULES, name, SOLUTION_OFFICIAL)
    return label


def is_solution(material_type: Optional[str]) -> bool:
    return bool(material_type) and material_type.startswith("Solution")


def is_revision_note(name: str) -> bool:
    return "RevisionNotes" in (name or "")


def is_archive(name: str) -> bool:
    return (name or "").lower().endswith(".zip")


def is_pdf(name: str) -> bool:
    return (name or "").lower().endswith(".pdf")


def extract_practice_identifier(name: str) -> str:
    """
    "HE1002_MacroeconomicsI_Finals_Practice1_QuestionPaper.pdf" -> "Practice 1".

    Without a trailing number the label is simply "Practice".
    """
    match = _PRACTICE_RE.search(name or "")
    if match:
        return f"Practice {match.group(1)}"
    return "Practice"


def extract_identifier(name: str) -> str:
    """
    Extract the weekly / sheet / lecture token used to group problem sheets
    and lecture notes, e.g. "MH1100_Week 3_Notes.pdf" -> "Week 3".
    """
    match = _IDENTIFIER_RE.search(name or "")
    return match.group(1) if match else UNCATEGORIZED


def extract_year_from_path(path: str) -> Optional[str]:
    """
    Extract the academic year from folder names like "Problem Sheets (AY23-24)".
    """
    match = _PATH_YEAR_RE.search(path or "")
    return match.group(1) if match else None


def group_by_identifier(refs: Iterable[FileRef]) -> Dict[str, Dict[str, List[FileRef]]]:
    """
    Group flat problem sheet / lecture note lists by their identifier.

    Solutions go to "solutions", everything else to "papers".
    """
    grouped: Dict[str, Dict[str, List[FileRef]]] = {}
    for ref in refs:
        identifier = extract_identifier(ref.name)
        bucket = grouped.setdefault(identifier, {"papers": [], "solutions": []})
        if is_solution(extract_material_type(ref.name)):
            bucket["solutions"].append(ref)
        else:
            bucket["papers"].append(ref)
    return grouped


# ---------------------------------------------------------------------------
# Folder names
# ---------------------------------------------------------------------------


def classify_folder(name: str) -> str:
    """
    Label the role of a course subfolder, FOLDER_NOT_APPLICABLE if unknown.
    """
    return first_match(FOLDER_RULES, name or "", FOLDER_NOT_APPLICABLE)


def describe(name: str) -> Dict[str, Any]:
    """
    All classifier decisions for one name (used by `coursecatalog classify`).
    """
    return {
        "name": name,
        "year": extract_academic_year(name),
        "material_type": extract_material_type(name),
        "revision_note": is_revision_note(name),
        "practice": extract_practice_identifier(name),
        "identifier": extract_identifier(name),
        "folder_role": classify_folder(name),
    }
