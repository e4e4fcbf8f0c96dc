import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from fixtures import LogToTemp, lines, row

from course_analyzer.table import CourseTable


def sample_table():
    return CourseTable.from_lines(lines(
        row(institution="MITx", number="6.002x", title="Circuits", subjects="Science", participants=300,
            hours=100.0, audited_rate=40.0),
        row(institution="HarvardX", number="ER22x", title="Justice", subjects="Humanities, History", participants=500,
            hours=300.0, audited_rate=10.0),
        row(institution="MITx", number="6.00x", title="Intro to Computer Science", subjects="Computer Science",
            participants=500, hours=300.0, audited_rate=25.0),
        row(institution="HarvardX", number="CS50x", title="Intro to Computer Science", subjects="Computer Science",
            participants=200, hours=900.0, audited_rate=30.0),
        row(institution="MITx", number="6.002x", launch="03/05/2013", title="Circuits", subjects="Science",
            participants=100, hours=50.0, audited_rate=60.0),
        row(institution="HarvardX", number="PH207x", title="Health", subjects="Government, Health", participants=300,
            hours=300.0, audited_rate=20.0),
    ))


class TestParticipation(unittest.TestCase):
    def setUp(self):
        self.table = sample_table()

    def test_by_institution_sorted_and_summed(self):
        out = self.table.participation_by_institution()
        self.assertEqual(list(out), ["HarvardX", "MITx"])
        self.assertEqual(out, {"HarvardX": 1000, "MITx": 900})
        total = sum(c.participants for c in self.table.courses())
        self.assertEqual(sum(out.values()), total)

    def test_by_institution_subject_ordering(self):
        out = self.table.participation_by_institution_subject()
        self.assertEqual(list(out.items()), [
            ("HarvardX-Humanities, History", 500),
            ("MITx-Computer Science", 500),
            ("MITx-Science", 400),
            ("HarvardX-Government, Health", 300),
            ("HarvardX-Computer Science", 200),
        ])
        values = list(out.values())
        self.assertEqual(values, sorted(values, reverse=True))


class TestTopCourses(LogToTemp, unittest.TestCase):
    def setUp(self):
        self.table = sample_table()

    def test_by_hours_dedupes_titles(self):
        self.assertEqual(self.table.top_courses(10, "hours"),
                         ["Intro to Computer Science", "Health", "Justice", "Circuits"])

    def test_by_participants_tie_broken_by_title(self):
        self.assertEqual(self.table.top_courses(3, "participants"),
                         ["Intro to Computer Science", "Justice", "Circuits"])

    def test_truncates_to_k(self):
        self.assertEqual(self.table.top_courses(1, "hours"), ["Intro to Computer Science"])
        self.assertEqual(self.table.top_courses(0, "hours"), [])

    def test_unknown_metric_falls_back_to_participants(self):
        with TemporaryDirectory() as tmp:
            self.redirect_log(tmp)
            self.assertEqual(self.table.top_courses(3, "rating"), self.table.top_courses(3, "participants"))
            self.assertIn("Unknown ranking metric", (Path(tmp) / "run.log").read_text(encoding="utf-8"))


class TestSearch(unittest.TestCase):
    def setUp(self):
        self.table = sample_table()

    def test_case_insensitive_subject_and_bounds_inclusive(self):
        self.assertEqual(self.table.search_courses("COMPUTER", 25.0, 300.0), ["Intro to Computer Science"])

    def test_each_hit_satisfies_predicates(self):
        hits = self.table.search_courses("science", 20.0, 400.0)
        self.assertEqual(hits, ["Circuits", "Intro to Computer Science"])
        for title in hits:
            self.assertTrue(any(
                c.course_title == title and "science" in c.subjects.lower()
                and c.audited_rate >= 20.0 and c.total_course_hours <= 400.0
                for c in self.table.courses()
            ))

    def test_empty_subject_matches_everything(self):
        self.assertEqual(len(self.table.search_courses("", 0.0, 1e9)), 4)

    def test_no_match(self):
        self.assertEqual(self.table.search_courses("science", 99.0, 1e9), [])


class TestEmptyTable(unittest.TestCase):
    def setUp(self):
        self.table = CourseTable.from_lines(lines())

    def test_every_query_returns_empty_container(self):
        self.assertEqual(len(self.table), 0)
        self.assertEqual(self.table.participation_by_institution(), {})
        self.assertEqual(self.table.participation_by_institution_subject(), {})
        self.assertEqual(self.table.instructor_course_lists(), {})
        self.assertEqual(self.table.top_courses(5, "hours"), [])
        self.assertEqual(self.table.top_courses(5, "participants"), [])
        self.assertEqual(self.table.search_courses("", 0.0, 1e9), [])


if __name__ == "__main__":
    unittest.main()
