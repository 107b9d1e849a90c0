"""
Scanning (notes folder tree -> CourseRecord objects).

Expected layout:

    <courses_root>/
        MH1100/                                  <- course folder (AA0000 prefix)
            MH1100_RevisionNotes.pdf             <- revision notes
            MH1100_PastYears.zip                 <- archive
            MH1100 - Calculus I - Finals/        <- exam folder, files carry _YY-YY_
            MH1100 - Calculus I - Midterms/
            MH1100 - Finals - Practice/          <- practice sets
            Problem Sheets (AY23-24)/
            Lecture Notes/

Important rules (DO NOT CHANGE):
- Only direct children of a course folder are inspected (one level of subfolders)
- Unrecognized files and folders are skipped silently
- A missing root is not an error: the result is simply empty
- Nothing raises out of scan_courses(); a bad entry is skipped
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

from coursecatalog import classify
from coursecatalog.model import CourseRecord, ExamYear, FileRef, Materials, PracticeSet
from coursecatalog.names import CourseNameResolver
from coursecatalog.urls import UrlBuilder, join_path


logger = logging.getLogger(__name__)

COURSE_CODE_RE = re.compile(r"^([A-Z]{2}\d{4})")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def extract_course_code(folder_name: str) -> Optional[str]:
    """
    "MH1100 - Calculus I" -> "MH1100"; None if the name is not a course folder.
    """
    match = COURSE_CODE_RE.match(folder_name or "")
    return match.group(1) if match else None


def _is_encodable(name: str) -> bool:
    """
    False for names with bytes that are not valid UTF-8 (surrogate-escaped by os.fsdecode).
    """
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _list_dir(path: Path) -> List[Path]:
    """
    Direct children of path, sorted by name for a stable manifest.

    Names that cannot be written into a URL or the JSON manifest are skipped.
    """
    out: List[Path] = []
    for p in path.iterdir():
        if _is_encodable(p.name):
            out.append(p)
        else:
            logger.debug("Skipping undecodable name %r in %s", p.name, path)
    return sorted(out, key=lambda p: p.name)


def _files(path: Path) -> List[Path]:
    return [p for p in _list_dir(path) if p.is_file()]


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class MaterialsBuilder:
    """
    Collects the files of one course and freezes them into a Materials record.

    Buckets are created on first use; build() returns immutable copies,
    so nothing half-filled leaks out of a failed scan.
    """

    def __init__(self) -> None:
        self.finals: Dict[str, Dict[str, List[FileRef]]] = {}
        self.midterms: Dict[str, Dict[str, List[FileRef]]] = {}
        self.practice: Dict[str, Dict[str, List[FileRef]]] = {}
        self.revision_notes: List[FileRef] = []
        self.past_year_zips: List[FileRef] = []
        self.problem_sheets: List[FileRef] = []
        self.lecture_notes: List[FileRef] = []
        self.problem_sheets_year: Optional[str] = None
        self.lecture_notes_year: Optional[str] = None

    def exam_year(self, role: str, year: str) -> Dict[str, List[FileRef]]:
        buckets = self.finals if role == classify.FOLDER_FINALS else self.midterms
        return buckets.setdefault(year, {"papers": [], "solutions": [], "reports": []})

    def add_exam_file(self, role: str, year: str, ref: FileRef) -> bool:
        """
        Route an exam PDF into its year bucket. Returns False if dropped.

        Examiner's reports are only kept for finals.
        """
        bucket = self.exam_year(role, year)
        material_type = ref.material_type
        if material_type == classify.QUESTION_PAPER:
            bucket["papers"].append(ref)
        elif classify.is_solution(material_type):
            bucket["solutions"].append(ref)
        elif material_type == classify.EXAMINER_REPORT and role == classify.FOLDER_FINALS:
            bucket["reports"].append(ref)
        else:
            return False
        return True

    def add_practice_file(self, identifier: str, ref: FileRef) -> None:
        bucket = self.practice.setdefault(identifier, {"papers": [], "solutions": []})
        if classify.is_solution(ref.material_type):
            bucket["solutions"].append(ref)
        else:
            # question papers and anything unrecognized
            bucket["papers"].append(ref)

    def build(self) -> Materials:
        def exam(buckets: Dict[str, Dict[str, List[FileRef]]]) -> Dict[str, ExamYear]:
            return {
                year: ExamYear(tuple(b["papers"]), tuple(b["solutions"]), tuple(b["reports"]))
                for year, b in buckets.items()
            }

        return Materials(
            finals=exam(self.finals),
            midterms=exam(self.midterms),
            revision_notes=tuple(self.revision_notes),
            past_year_zips=tuple(self.past_year_zips),
            problem_sheets=tuple(self.problem_sheets),
            lecture_notes=tuple(self.lecture_notes),
            problem_sheets_year=self.problem_sheets_year,
            lecture_notes_year=self.lecture_notes_year,
            practice_materials={
                label: PracticeSet(tuple(b["papers"]), tuple(b["solutions"])) for label, b in self.practice.items()
            },
        )


# ---------------------------------------------------------------------------
# Course folder scanning (CORE LOGIC)
# ---------------------------------------------------------------------------


class CourseScanner:
    """
    Scans one course folder at a time into a CourseRecord.
    """

    def __init__(self, resolver: CourseNameResolver, urls: UrlBuilder, notes_dir: str) -> None:
        self.resolver = resolver
        self.urls = urls
        self.notes_dir = notes_dir

    def _ref(self, folder: str, sub: str, file_name: str, material_type: Optional[str] = None) -> FileRef:
        rel_path = join_path(self.notes_dir, folder, sub, file_name)
        return FileRef(
            name=file_name,
            path=rel_path,
            download_url=self.urls.download_url(rel_path, archive=classify.is_archive(file_name)),
            material_type=material_type,
        )

    def _scan_root_file(self, b: MaterialsBuilder, folder: str, file_name: str) -> None:
        if classify.is_revision_note(file_name):
            b.revision_notes.append(self._ref(folder, "", file_name))
        elif classify.is_archive(file_name):
            b.past_year_zips.append(self._ref(folder, "", file_name))
        else:
            logger.debug("Skipping %s/%s", folder, file_name)

    def _scan_practice(self, b: MaterialsBuilder, folder: str, sub: Path) -> None:
        for f in _files(sub):
            if classify.is_archive(f.name):
                b.past_year_zips.append(self._ref(folder, sub.name, f.name))
                continue
            if not classify.is_pdf(f.name):
                continue

            identifier = classify.extract_practice_identifier(f.name)
            ref = self._ref(folder, sub.name, f.name, classify.extract_material_type(f.name))
            b.add_practice_file(identifier, ref)

    def _scan_exams(self, b: MaterialsBuilder, folder: str, sub: Path, role: str) -> None:
        for f in _files(sub):
            if classify.is_archive(f.name):
                b.past_year_zips.append(self._ref(folder, sub.name, f.name))
                continue
            if not classify.is_pdf(f.name):
                continue

            year = classify.extract_academic_year(f.name)
            if not year:
                logger.debug("No academic year in %s/%s/%s, dropped", folder, sub.name, f.name)
                continue

            ref = self._ref(folder, sub.name, f.name, classify.extract_material_type(f.name))
            if not b.add_exam_file(role, year, ref):
                logger.debug("Unrouted %s file %s/%s/%s", ref.material_type, folder, sub.name, f.name)

    def _scan_flat(self, target: List[FileRef], folder: str, sub: Path) -> None:
        for f in _files(sub):
            if classify.is_pdf(f.name):
                target.append(self._ref(folder, sub.name, f.name))

    def _scan_subfolder(self, b: MaterialsBuilder, folder: str, sub: Path) -> None:
        role = classify.classify_folder(sub.name)

        if role == classify.FOLDER_PRACTICE:
            self._scan_practice(b, folder, sub)
        elif role in (classify.FOLDER_FINALS, classify.FOLDER_MIDTERMS):
            self._scan_exams(b, folder, sub, role)
        elif role == classify.FOLDER_PROBLEM_SHEETS:
            self._scan_flat(b.problem_sheets, folder, sub)
            # first "(AYxx-yy)" folder wins
            b.problem_sheets_year = b.problem_sheets_year or classify.extract_year_from_path(sub.name)
        elif role == classify.FOLDER_LECTURE_NOTES:
            self._scan_flat(b.lecture_notes, folder, sub)
            b.lecture_notes_year = b.lecture_notes_year or classify.extract_year_from_path(sub.name)
        else:
            logger.debug("Skipping folder %s/%s", folder, sub.name)

    def scan(self, course_dir: Path) -> Optional[CourseRecord]:
        """
        Scan one course folder. Returns None if the folder name has no course code.
        """
        folder = course_dir.name
        code = extract_course_code(folder)
        if code is None:
            return None

        b = MaterialsBuilder()

        for item in _list_dir(course_dir):
            try:
                if item.is_file():
                    self._scan_root_file(b, folder, item.name)
                elif item.is_dir():
                    self._scan_subfolder(b, folder, item)
            except (OSError, ValueError) as exc:
                logger.warning("Skipping unreadable %s: %s", item, exc)

        return CourseRecord(
            code=code,
            name=self.resolver.resolve(code, folder),
            materials=b.build(),
            folder_name=folder,
            github_url=self.urls.tree_url(join_path(self.notes_dir, folder)),
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def scan_courses(
    courses_root: str | Path,
    resolver: Optional[CourseNameResolver] = None,
    urls: Optional[UrlBuilder] = None,
    notes_dir: Optional[str] = None,
) -> List[CourseRecord]:
    """
    Scan every course folder directly below courses_root.

    notes_dir is the repository-relative prefix of all manifest paths
    (default: the name of courses_root, e.g. "Notes").
    """
    root = Path(courses_root)
    if not root.is_dir():
        logger.error("Courses directory not found: %s", root)
        return []

    scanner = CourseScanner(
        resolver=resolver if resolver is not None else CourseNameResolver(),
        urls=urls if urls is not None else UrlBuilder(),
        notes_dir=notes_dir if notes_dir is not None else root.name,
    )

    try:
        entries = _list_dir(root)
    except (OSError, ValueError) as exc:
        logger.error("Could not list courses directory %s: %s", root, exc)
        return []

    courses: List[CourseRecord] = []
    seen: Dict[str, str] = {}

    for entry in entries:
        try:
            if not entry.is_dir():
                continue
            record = scanner.scan(entry)
        except (OSError, ValueError) as exc:
            logger.warning("Skipping unreadable course folder %s: %s", entry, exc)
            continue

        if record is None:
            continue

        if record.code in seen:
            logger.warning(
                "Duplicate course code %s in %r (already taken by %r), skipped",
                record.code,
                entry.name,
                seen[record.code],
            )
            continue

        seen[record.code] = entry.name
        courses.append(record)

    logger.info("Scanned %d course folders in %s", len(courses), root)
    return courses
