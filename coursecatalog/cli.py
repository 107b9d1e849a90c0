"""
CLI (Command Line Interface).

This module provides the terminal commands used by the build pipeline and for debugging, e.g.:

    coursecatalog generate --root Notes --out Website/v1/courses.json
    coursecatalog summary --manifest Website/v1/courses.json
    coursecatalog classify "MH1100_23-24_Finals_Solution by QRS.pdf"

Note:
- All classification lives in coursecatalog/classify.py and coursecatalog/scan.py
- A missing notes folder is not an error: an empty manifest is written
"""

from __future__ import annotations

import argparse
import logging
from typing import Any

from rich.console import Console
from rich.table import Table

from coursecatalog.classify import describe, group_by_identifier
from coursecatalog.config import Settings, load_settings
from coursecatalog.log import setup_logging
from coursecatalog.manifest import generate, load_manifest, summarize, write_manifest
from coursecatalog.model import FileRef
from coursecatalog.names import UNKNOWN_NAME_POLICIES, CourseNameResolver, load_course_names
from coursecatalog.urls import UrlBuilder


logger = logging.getLogger(__name__)

console = Console()


def _settings_from_args(args: argparse.Namespace) -> Settings:
    """
    Defaults <- config file <- environment <- command line flags.
    """
    settings = load_settings(args.config)
    return settings.updated(
        courses_root=getattr(args, "root", None),
        output_path=getattr(args, "out", None),
        notes_dir=getattr(args, "notes_dir", None),
        course_names_path=getattr(args, "names", None),
        unknown_name_policy=getattr(args, "unknown_name", None),
        log_level=getattr(args, "log_level", None),
    )


def _cmd_generate(args: argparse.Namespace, settings: Settings) -> int:
    """
    Scan the notes folder and write the manifest.
    """
    names = load_course_names(settings.course_names_path or None)
    resolver = CourseNameResolver(names, unknown_policy=settings.unknown_name_policy)
    urls = UrlBuilder(repo=settings.repo, branch=settings.branch)

    manifest = generate(
        settings.courses_root,
        resolver=resolver,
        urls=urls,
        notes_dir=settings.effective_notes_dir,
    )

    try:
        out = write_manifest(manifest, settings.output_path)
    except OSError as exc:
        logger.error("Could not write manifest %s: %s", settings.output_path, exc)
        return 1

    counts = summarize(manifest.to_dict())
    console.print(f"Generated {out} with {counts['courses']} courses")
    _print_counts(counts)
    return 0


def _print_counts(counts: dict[str, int]) -> None:
    table = Table(title="Courses per section")
    table.add_column("Section")
    table.add_column("Courses", justify="right")
    for section, n in counts.items():
        if section != "courses":
            table.add_row(section, str(n))
    console.print(table)


def _count(value: Any) -> int:
    """
    Number of files in a section (list, or dict of buckets).
    """
    if isinstance(value, list):
        return len(value)
    if isinstance(value, dict):
        return sum(_count(v) for v in value.values())
    return 0


def _cmd_summary(args: argparse.Namespace, settings: Settings) -> int:
    """
    Print per-course file counts of an existing manifest.
    """
    path = args.manifest or settings.output_path
    data = load_manifest(path)
    courses = data.get("courses", [])
    if not courses:
        console.print(f"No courses in {path}.")
        return 0

    table = Table(title=f"{path} (generated {data.get('generatedAt') or 'unknown'})")
    table.add_column("Code")
    table.add_column("Name")
    table.add_column("Finals", justify="right")
    table.add_column("Midterms", justify="right")
    table.add_column("Practice", justify="right")
    table.add_column("Sheets", justify="right")
    table.add_column("Lectures", justify="right")
    table.add_column("ZIPs", justify="right")

    for c in courses:
        m = c.get("materials") or {}
        sheets = [
            FileRef(str(x.get("name", "")), str(x.get("path", "")), str(x.get("downloadUrl", "")))
            for x in m.get("problemSheets", [])
        ]
        sheets_year = f" AY{m['problemSheetsYear']}" if m.get("problemSheetsYear") else ""
        table.add_row(
            str(c.get("code", "")),
            str(c.get("name", "")),
            ", ".join(sorted(m.get("finals", {}), reverse=True)),
            ", ".join(sorted(m.get("midterms", {}), reverse=True)),
            str(len(m.get("practiceMaterials", {}))),
            f"{len(sheets)} ({len(group_by_identifier(sheets))} groups{sheets_year})" if sheets else "0",
            str(_count(m.get("lectureNotes"))),
            str(_count(m.get("pastYearZips"))),
        )

    console.print(table)
    return 0


def _cmd_classify(args: argparse.Namespace) -> int:
    """
    Show how the classifiers label the given file or folder names.
    """
    table = Table()
    for col in ("name", "year", "material_type", "revision_note", "practice", "identifier", "folder_role"):
        table.add_column(col)
    for name in args.names:
        info = describe(name)
        table.add_row(*["" if v is None else str(v) for v in info.values()])
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="coursecatalog", description="Course materials manifest generator")
    parser.add_argument("--config", type=str, default=None, help="JSON config file")
    parser.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ...")
    sub = parser.add_subparsers(dest="command", required=True)

    p_gen = sub.add_parser("generate", help="Scan the notes folder and write the manifest")
    p_gen.add_argument("--root", type=str, default=None, help="Courses root folder (e.g. Notes)")
    p_gen.add_argument("--out", type=str, default=None, help="Output manifest path (e.g. courses.json)")
    p_gen.add_argument("--notes-dir", type=str, default=None, help="Repository-relative prefix of manifest paths")
    p_gen.add_argument("--names", type=str, default=None, help="Course name table (JSON)")
    p_gen.add_argument(
        "--unknown-name",
        choices=UNKNOWN_NAME_POLICIES,
        default=None,
        help="Title for unknown course codes",
    )

    p_sum = sub.add_parser("summary", help="Show the contents of a manifest")
    p_sum.add_argument("--manifest", type=str, default=None, help="Manifest path")

    p_cls = sub.add_parser("classify", help="Show classifier decisions for names")
    p_cls.add_argument("names", nargs="+", help="File or folder names")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = _settings_from_args(args)
    setup_logging(settings.log_level)

    if args.command == "generate":
        raise SystemExit(_cmd_generate(args, settings))
    if args.command == "summary":
        raise SystemExit(_cmd_summary(args, settings))
    if args.command == "classify":
        raise SystemExit(_cmd_classify(args))

    raise SystemExit(2)
