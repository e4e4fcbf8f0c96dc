from __future__ import annotations
import pandas as pd

METRICS = {
    "hours": "total_course_hours",
    "participants": "participants",
}
DEFAULT_METRIC = "participants"

def metric_column(by: str) -> str | None:
    return METRICS.get((by or "").strip().lower())

def distinct_titles(ordered: pd.DataFrame, limit: int | None = None) -> list[str]:
    # first occurrence wins, relative order is kept
    titles = ordered["course_title"].drop_duplicates()
    if limit is not None:
        titles = titles.head(max(int(limit), 0))
    return [str(t) for t in titles]

def top_courses(df: pd.DataFrame, k: int, by: str = "hours") -> list[str]:
    col = metric_column(by) or METRICS[DEFAULT_METRIC]
    if k <= 0:
        return []
    ordered = df.sort_values([col, "course_title"], ascending=[False, True], kind="mergesort")
    return distinct_titles(ordered, k)

def search_courses(df: pd.DataFrame, subject: str, min_audited_rate: float, max_total_hours: float) -> list[str]:
    hit = df["subjects"].str.lower().str.contains((subject or "").lower(), regex=False, na=False)
    hit &= df["audited_rate"] >= float(min_audited_rate)
    hit &= df["total_course_hours"] <= float(max_total_hours)
    return sorted(set(df.loc[hit, "course_title"].astype(str)))
