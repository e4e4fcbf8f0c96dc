import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))

from course_analyzer.report import logging as report_logging  # noqa: E402

HEADER = (
    "Institution,Course Number,Launch Date,Course Title,Instructors,Course Subject,Year,"
    "Honor Code Certificates,Participants (Course Content Accessed),"
    "Audited (> 50% Course Content Accessed),Certified,% Audited,% Certified,"
    "% Certified of > 50% Course Content Accessed,% Played Video,% Posted in Forum,"
    "% Grade Higher Than Zero,Total Course Hours (Thousands),Median Hours for Certification,"
    "Median Age,% Male,% Female,% Bachelor's Degree or Higher"
)

STEM = "Science, Technology, Engineering, and Mathematics"


def _q(value):
    value = str(value)
    return f'"{value}"' if ", " in value else value


def row(institution="MITx", number="6.002x", launch="09/05/2012", title="Circuits and Electronics",
        instructors="Khurram Afridi", subjects=STEM, year=2012, honor=1, participants=1000,
        audited=500, certified=100, audited_rate=50.0, certified_rate=10.0, certified_rate_5=20.0,
        played_video_rate=80.0, posted_rate=5.0, ght0_rate=30.0, hours=400.0, median_hours=64.45,
        median_age=26.0, male_rate=88.28, female_rate=11.72, bachelors_rate=60.68):
    fields = [
        institution, number, launch, _q(title), _q(instructors), _q(subjects), year, honor,
        participants, audited, certified, audited_rate, certified_rate, certified_rate_5,
        played_video_rate, posted_rate, ght0_rate, hours, median_hours, median_age,
        male_rate, female_rate, bachelors_rate,
    ]
    return ",".join(str(f) for f in fields)


def csv_text(*rows):
    return "\n".join([HEADER, *rows]) + "\n"


def write_csv(directory, *rows, name="courses.csv"):
    path = Path(directory) / name
    path.write_text(csv_text(*rows), encoding="utf-8")
    return path


def lines(*rows):
    return csv_text(*rows).splitlines(keepends=True)


class LogToTemp:
    """Mixin that points the package log at a temp dir for the duration of a test."""

    def redirect_log(self, directory):
        self._old_log_path = report_logging.LOG_PATH
        report_logging.set_log_path(Path(directory) / "run.log")
        self.addCleanup(self._restore_log)

    def _restore_log(self):
        report_logging.LOG_PATH = self._old_log_path
