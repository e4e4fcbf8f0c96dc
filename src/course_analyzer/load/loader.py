from __future__ import annotations
from pathlib import Path
from typing import Iterable

import pandas as pd

from ..report.logging import log

class LoadError(RuntimeError):
    pass

COLUMNS = [
    "institution", "course_number", "launch_date", "course_title", "instructors", "subjects",
    "year", "honor_code", "participants", "audited", "certified",
    "audited_rate", "certified_rate", "certified_rate_5", "played_video_rate",
    "posted_in_forum_rate", "grade_higher_than_0_rate", "total_course_hours",
    "median_hours", "median_age", "male_rate", "female_rate", "bachelors_rate",
]
INT_COLS = ["year", "honor_code", "participants", "audited", "certified"]
FLOAT_COLS = COLUMNS[11:]
# title, instructors, subjects carry ", " as an in-field list separator
LIST_COLS = ["course_title", "instructors", "subjects"]

DEFAULT_DATE_FORMAT = "%m/%d/%Y"
_SEP = "\x1f"
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1

def split_names(raw: str) -> tuple[str, ...]:
    """Split an "A, B, and C" style list into ("A", "B", "C").

    Only a leading "and " is dropped, so names that merely contain "and" survive.
    """
    out = []
    for part in (raw or "").split(", "):
        part = part.strip()
        if part.startswith("and "):
            part = part[4:].strip()
        if part:
            out.append(part)
    return tuple(out)

def _split_line(line: str) -> list[str]:
    fields = line.replace(", ", _SEP).split(",")
    return [f.replace(_SEP, ", ") for f in fields]

def _first_bad(bad: pd.Series, raw: pd.Series, line_nos: list[int], col: str, what: str) -> LoadError:
    i = int(bad.to_numpy().argmax())
    return LoadError(f"line {line_nos[i]}: {col} is not {what}: {raw.iat[i]!r}")

def _coerce(df: pd.DataFrame, line_nos: list[int], date_format: str) -> pd.DataFrame:
    out = df.copy()
    for c in INT_COLS:
        txt = out[c].str.strip()
        bad = ~txt.str.fullmatch(r"[+-]?\d+", na=False).astype(bool)
        if bad.any():
            raise _first_bad(bad, out[c], line_nos, c, "an integer")
        try:
            out[c] = txt.astype("int64")
        except (OverflowError, ValueError):
            bad = txt.map(lambda s: not _INT64_MIN <= int(s) <= _INT64_MAX).astype(bool)
            raise _first_bad(bad, out[c], line_nos, c, "a 64-bit integer") from None
    for c in FLOAT_COLS:
        num = pd.to_numeric(out[c].str.strip(), errors="coerce")
        bad = num.isna()
        if bad.any():
            raise _first_bad(bad, out[c], line_nos, c, "a number")
        out[c] = num.astype(float)
    dates = pd.to_datetime(out["launch_date"].str.strip(), format=date_format, errors="coerce")
    bad = dates.isna()
    if bad.any():
        raise _first_bad(bad, out["launch_date"], line_nos, "launch_date", f"a date ({date_format})")
    out["launch_date"] = dates
    for c in LIST_COLS:
        out[c] = out[c].str.replace('"', "", regex=False)
    out["instructor_names"] = out["instructors"].map(split_names)
    out["subject_names"] = out["subjects"].map(split_names)
    return out

def parse_lines(lines: Iterable[str], date_format: str = DEFAULT_DATE_FORMAT) -> pd.DataFrame:
    rows = []
    line_nos = []
    it = iter(lines)
    next(it, None)  # header
    for n, line in enumerate(it, start=2):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        fields = _split_line(line)
        if len(fields) != len(COLUMNS):
            raise LoadError(f"line {n}: expected {len(COLUMNS)} fields, got {len(fields)}")
        rows.append(fields)
        line_nos.append(n)
    df = pd.DataFrame(rows, columns=COLUMNS, dtype=object)
    if df.empty:
        df = df.astype({c: "int64" for c in INT_COLS} | {c: float for c in FLOAT_COLS})
        df["launch_date"] = pd.to_datetime(df["launch_date"])
        df["instructor_names"] = pd.Series(dtype=object)
        df["subject_names"] = pd.Series(dtype=object)
        return df
    return _coerce(df, line_nos, date_format)

def load_courses(path: str, date_format: str = DEFAULT_DATE_FORMAT) -> pd.DataFrame:
    p = Path(path)
    if not p.is_file():
        raise LoadError(f"Dataset not found: {p}")
    try:
        with open(p, "r", encoding="utf-8") as f:
            df = parse_lines(f, date_format=date_format)
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read {p}: {e}") from e
    log(f"Loaded {len(df)} course records from {p}")
    return df
