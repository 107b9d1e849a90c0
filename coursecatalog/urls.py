"""
Download URLs for files in the notes repository.

Two templates are used:
- raw document: PDFs that the catalog opens directly in the browser
- release archive: ZIP bundles that have to be downloaded through GitHub

Every path segment is percent-encoded, so folder names like
"HE1002 - Macroeconomics I - Finals" survive inside a URL.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote


RAW_URL_TEMPLATE = "https://raw.githubusercontent.com/{repo}/{branch}/{path}"
ARCHIVE_URL_TEMPLATE = "https://github.com/{repo}/raw/{branch}/{path}"
TREE_URL_TEMPLATE = "https://github.com/{repo}/tree/{branch}/{path}"


def join_path(*segments: str) -> str:
    """
    Join repository-relative path segments with "/" (empty segments are skipped).
    """
    return "/".join(s.strip("/") for s in segments if s and s.strip("/"))


def encode_path(path: str) -> str:
    """
    Percent-encode each "/"-separated segment of a repository-relative path.
    """
    return "/".join(quote(seg, safe="") for seg in path.split("/"))


@dataclass(frozen=True)
class UrlBuilder:
    """
    Turns repository-relative paths into absolute download URLs.
    """

    repo: str = "yuhesui/QRSNTU"
    branch: str = "main"
    raw_template: str = RAW_URL_TEMPLATE
    archive_template: str = ARCHIVE_URL_TEMPLATE
    tree_template: str = TREE_URL_TEMPLATE

    def _render(self, template: str, path: str) -> str:
        return template.format(repo=self.repo, branch=self.branch, path=encode_path(path))

    def raw_url(self, path: str) -> str:
        return self._render(self.raw_template, path)

    def archive_url(self, path: str) -> str:
        return self._render(self.archive_template, path)

    def tree_url(self, path: str) -> str:
        return self._render(self.tree_template, path)

    def download_url(self, path: str, archive: bool) -> str:
        return self.archive_url(path) if archive else self.raw_url(path)
