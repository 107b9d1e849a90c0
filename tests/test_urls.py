import unittest

from coursecatalog.urls import UrlBuilder, encode_path, join_path


class TestUrls(unittest.TestCase):
    def test_join_path_skips_empty_segments(self) -> None:
        self.assertEqual(join_path("Notes", "MH1100", "", "a.pdf"), "Notes/MH1100/a.pdf")

    def test_segments_are_percent_encoded(self) -> None:
        path = "Notes/HE1002/HE1002 - Finals/HE1002_23-24_Examiner's Report.pdf"
        self.assertEqual(
            encode_path(path),
            "Notes/HE1002/HE1002%20-%20Finals/HE1002_23-24_Examiner%27s%20Report.pdf",
        )

    def test_raw_and_archive_templates_differ(self) -> None:
        urls = UrlBuilder(repo="owner/repo", branch="main")
        self.assertEqual(
            urls.download_url("Notes/MH1100/a b.pdf", archive=False),
            "https://raw.githubusercontent.com/owner/repo/main/Notes/MH1100/a%20b.pdf",
        )
        self.assertEqual(
            urls.download_url("Notes/MH1100/Past Years.zip", archive=True),
            "https://github.com/owner/repo/raw/main/Notes/MH1100/Past%20Years.zip",
        )

    def test_tree_url(self) -> None:
        urls = UrlBuilder(repo="owner/repo", branch="dev")
        self.assertEqual(urls.tree_url("Notes/MH1100"), "https://github.com/owner/repo/tree/dev/Notes/MH1100")


if __name__ == "__main__":
    unittest.main()
