from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Iterator

import pandas as pd

from .load.loader import COLUMNS, DEFAULT_DATE_FORMAT, load_courses, parse_lines
from .queries.participation import participation_by_institution, participation_by_institution_subject
from .queries.instructors import build_instructor_index, instructor_course_lists
from .queries.ranking import DEFAULT_METRIC, metric_column, search_courses, top_courses
from .recommend.similarity import course_profiles, latest_run_mask, recommend
from .report.quality import quality_report
from .report.logging import log

@dataclass(frozen=True)
class Course:
    institution: str
    course_number: str
    launch_date: date
    course_title: str
    instructors: str
    subjects: str
    year: int
    honor_code: int
    participants: int
    audited: int
    certified: int
    audited_rate: float
    certified_rate: float
    certified_rate_5: float
    played_video_rate: float
    posted_in_forum_rate: float
    grade_higher_than_0_rate: float
    total_course_hours: float
    median_hours: float
    median_age: float
    male_rate: float
    female_rate: float
    bachelors_rate: float
    instructor_names: tuple = ()
    subject_names: tuple = ()

class CourseTable:
    """Load-once, query-many view over the course dataset.

    The frame is never modified after construction. The instructor index, the
    latest-run mask and the per-course-number profiles are built here once and
    shared by every query call.
    """

    def __init__(self, df: pd.DataFrame, recommend_limit: int = 10, scale: float = 100.0):
        self._df = df.reset_index(drop=True)
        self.recommend_limit = int(recommend_limit)
        self.scale = float(scale)
        self._instructor_index = build_instructor_index(self._df)
        self._latest = latest_run_mask(self._df)
        self._profiles = course_profiles(self._df)

    @classmethod
    def from_csv(cls, path: str, date_format: str | None = None, **kw) -> "CourseTable":
        return cls(load_courses(path, date_format=date_format or DEFAULT_DATE_FORMAT), **kw)

    @classmethod
    def from_lines(cls, lines, date_format: str | None = None, **kw) -> "CourseTable":
        return cls(parse_lines(lines, date_format=date_format or DEFAULT_DATE_FORMAT), **kw)

    @classmethod
    def from_config(cls, path: str, cfg: dict) -> "CourseTable":
        rec = cfg.get("recommend", {}) or {}
        return cls.from_csv(
            path,
            date_format=(cfg.get("load", {}) or {}).get("date_format"),
            recommend_limit=int(rec.get("limit", 10)),
            scale=float(rec.get("scale", 100.0)),
        )

    def __len__(self) -> int:
        return len(self._df)

    def __iter__(self) -> Iterator[Course]:
        return self.courses()

    @property
    def frame(self) -> pd.DataFrame:
        return self._df.copy()

    def courses(self) -> Iterator[Course]:
        fields = COLUMNS + ["instructor_names", "subject_names"]
        for row in self._df[fields].itertuples(index=False, name=None):
            rec = dict(zip(fields, row))
            rec["launch_date"] = rec["launch_date"].date()
            for c in ("year", "honor_code", "participants", "audited", "certified"):
                rec[c] = int(rec[c])
            yield Course(**rec)

    def participation_by_institution(self) -> dict[str, int]:
        return participation_by_institution(self._df)

    def participation_by_institution_subject(self) -> dict[str, int]:
        return participation_by_institution_subject(self._df)

    def instructor_course_lists(self) -> dict[str, tuple[list[str], list[str]]]:
        return instructor_course_lists(self._df, self._instructor_index)

    def top_courses(self, k: int, by: str = "hours") -> list[str]:
        if metric_column(by) is None:
            log(f"Unknown ranking metric {by!r}; using {DEFAULT_METRIC}")
        return top_courses(self._df, k, by)

    def search_courses(self, subject: str, min_audited_rate: float, max_total_hours: float) -> list[str]:
        return search_courses(self._df, subject, min_audited_rate, max_total_hours)

    def recommend(self, age: float, gender: int, bachelor: int) -> list[str]:
        return recommend(self._df, age, gender, bachelor, limit=self.recommend_limit, scale=self.scale,
                         latest_mask=self._latest, profiles=self._profiles)

    def quality_report(self, cfg: dict | None = None) -> dict:
        return quality_report(self._df, cfg or {})
