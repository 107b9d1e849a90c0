"""
Unit tests for the file/folder name classifiers.

Rules under test:
- first matching rule wins ("QuestionPaper" beats "Solution")
- "Practice" folders beat "Finals"/"Midterms" folders
- no-match returns None / a default label, never raises
"""

import unittest

from coursecatalog import classify
from coursecatalog.model import FileRef


class TestAcademicYear(unittest.TestCase):
    def test_year_between_underscores(self) -> None:
        self.assertEqual(classify.extract_academic_year("MH1100_23-24_Finals_QuestionPaper.pdf"), "23-24")

    def test_first_match_wins(self) -> None:
        self.assertEqual(classify.extract_academic_year("X_21-22_and_22-23_.pdf"), "21-22")

    def test_no_year(self) -> None:
        self.assertIsNone(classify.extract_academic_year("MH1100_Finals_QuestionPaper.pdf"))
        # not delimited by underscores
        self.assertIsNone(classify.extract_academic_year("MH1100 23-24 Finals.pdf"))
        self.assertIsNone(classify.extract_academic_year(""))


class TestMaterialType(unittest.TestCase):
    def test_question_paper_beats_solution(self) -> None:
        name = "MH1100_23-24_Finals_QuestionPaper_Solution by QRS.pdf"
        self.assertEqual(classify.extract_material_type(name), classify.QUESTION_PAPER)

    def test_examiner_report_variants(self) -> None:
        self.assertEqual(
            classify.extract_material_type("HE1002_22-23_Finals_Examiner's Report.pdf"), classify.EXAMINER_REPORT
        )
        self.assertEqual(
            classify.extract_material_type("HE1002_22-23_Finals_ExaminersReport.pdf"), classify.EXAMINER_REPORT
        )

    def test_solution_refinements(self) -> None:
        self.assertEqual(classify.extract_material_type("A_23-24_Solution by QRS.pdf"), classify.SOLUTION_BY_QRS)
        self.assertEqual(classify.extract_material_type("A_23-24_Unofficial Solution.pdf"), classify.SOLUTION_UNOFFICIAL)
        self.assertEqual(
            classify.extract_material_type("A_23-24_Handwritten Solution.pdf"), classify.SOLUTION_HANDWRITTEN
        )
        self.assertEqual(classify.extract_material_type("A_23-24_Solution.pdf"), classify.SOLUTION_OFFICIAL)

    def test_qrs_checked_before_unofficial(self) -> None:
        name = "A_23-24_Unofficial Solution by QRS.pdf"
        self.assertEqual(classify.extract_material_type(name), classify.SOLUTION_BY_QRS)

    def test_other(self) -> None:
        self.assertEqual(classify.extract_material_type("Cheatsheet.pdf"), classify.OTHER)
        self.assertEqual(classify.extract_material_type(""), classify.OTHER)

    def test_is_solution(self) -> None:
        self.assertTrue(classify.is_solution(classify.SOLUTION_HANDWRITTEN))
        self.assertFalse(classify.is_solution(classify.QUESTION_PAPER))
        self.assertFalse(classify.is_solution(None))


class TestIdentifiers(unittest.TestCase):
    def test_revision_note(self) -> None:
        self.assertTrue(classify.is_revision_note("MH1100_RevisionNotes.pdf"))
        self.assertFalse(classify.is_revision_note("MH1100_Revision Notes.pdf"))

    def test_practice_numbered(self) -> None:
        name = "HE1002_MacroeconomicsI_Finals_Practice1_QuestionPaper.pdf"
        self.assertEqual(classify.extract_practice_identifier(name), "Practice 1")
        self.assertEqual(classify.extract_practice_identifier("HE1002_Practice 2_Solution.pdf"), "Practice 2")
        self.assertEqual(classify.extract_practice_identifier("HE1002_Practice3.pdf"), "Practice 3")

    def test_practice_unnumbered(self) -> None:
        self.assertEqual(classify.extract_practice_identifier("HE1002_Practice_QuestionPaper.pdf"), "Practice")
        self.assertEqual(classify.extract_practice_identifier("Mock exam.pdf"), "Practice")

    def test_weekly_identifier(self) -> None:
        self.assertEqual(classify.extract_identifier("MH1100_Week 3_Notes.pdf"), "Week 3")
        self.assertEqual(classify.extract_identifier("MH1100_ProblemSheet_4_Solution.pdf"), "ProblemSheet_4")
        self.assertEqual(classify.extract_identifier("MH1100_Problem Sheet_QuestionPaper.pdf"), "Problem Sheet")
        self.assertEqual(classify.extract_identifier("MH1100_Lecture 7_Slides.pdf"), "Lecture 7")
        self.assertEqual(classify.extract_identifier("MH1100_05_Tutorial.pdf"), "05")
        self.assertEqual(classify.extract_identifier("MH1100 Notes.pdf"), classify.UNCATEGORIZED)

    def test_year_from_path(self) -> None:
        self.assertEqual(classify.extract_year_from_path("Notes/MH1100/Problem Sheets (AY23-24)/x.pdf"), "23-24")
        self.assertIsNone(classify.extract_year_from_path("Notes/MH1100/Problem Sheets/x.pdf"))

    def test_group_by_identifier(self) -> None:
        refs = [
            FileRef("MH1100_Week 1_QuestionPaper.pdf", "p1", "u1"),
            FileRef("MH1100_Week 1_Solution.pdf", "p2", "u2"),
            FileRef("MH1100_Week 2_QuestionPaper.pdf", "p3", "u3"),
            FileRef("Intro.pdf", "p4", "u4"),
        ]
        grouped = classify.group_by_identifier(refs)
        self.assertEqual(sorted(grouped), ["Uncategorized", "Week 1", "Week 2"])
        self.assertEqual(len(grouped["Week 1"]["papers"]), 1)
        self.assertEqual(len(grouped["Week 1"]["solutions"]), 1)
        self.assertEqual(grouped["Uncategorized"]["papers"][0].name, "Intro.pdf")

    def test_extensions(self) -> None:
        self.assertTrue(classify.is_archive("MH1100.ZIP"))
        self.assertTrue(classify.is_pdf("a.pdf"))
        self.assertFalse(classify.is_pdf("a.pdf.txt"))


class TestFolderRole(unittest.TestCase):
    def test_practice_before_finals(self) -> None:
        role = classify.classify_folder("HE1002 - Macroeconomics I - Finals - Practice")
        self.assertEqual(role, classify.FOLDER_PRACTICE)

    def test_roles(self) -> None:
        self.assertEqual(classify.classify_folder("MH1100 - Calculus I - Finals"), classify.FOLDER_FINALS)
        self.assertEqual(classify.classify_folder("MH1100 - Midterm"), classify.FOLDER_MIDTERMS)
        self.assertEqual(classify.classify_folder("MH1100 - Midterms"), classify.FOLDER_MIDTERMS)
        self.assertEqual(classify.classify_folder("Problem Sheets (AY23-24)"), classify.FOLDER_PROBLEM_SHEETS)
        self.assertEqual(classify.classify_folder("Lecture Notes"), classify.FOLDER_LECTURE_NOTES)

    def test_not_applicable(self) -> None:
        self.assertEqual(classify.classify_folder("Scratch"), classify.FOLDER_NOT_APPLICABLE)
        self.assertEqual(classify.classify_folder(""), classify.FOLDER_NOT_APPLICABLE)

    def test_describe(self) -> None:
        info = classify.describe("MH1100_23-24_Finals_Solution by QRS.pdf")
        self.assertEqual(info["year"], "23-24")
        self.assertEqual(info["material_type"], classify.SOLUTION_BY_QRS)
        self.assertEqual(info["folder_role"], classify.FOLDER_FINALS)


if __name__ == "__main__":
    unittest.main()
