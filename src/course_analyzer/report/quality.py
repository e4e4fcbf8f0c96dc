from __future__ import annotations
import numpy as np
import pandas as pd

RATE_COLS = [
    "audited_rate", "certified_rate", "certified_rate_5", "played_video_rate",
    "posted_in_forum_rate", "grade_higher_than_0_rate", "male_rate", "female_rate", "bachelors_rate",
]
KEY_COLS = ["institution", "course_number", "launch_date"]

def quality_report(df: pd.DataFrame, cfg: dict) -> dict:
    g = cfg.get("guardrails", {}) or {}
    n = len(df)

    dup_rows = int(df.duplicated(subset=KEY_COLS, keep="first").sum()) if n else 0
    rates = df[RATE_COLS].to_numpy(dtype=float) if n else np.empty((0, len(RATE_COLS)))
    out_of_range = int(((rates < 0) | (rates > 100)).any(axis=1).sum())

    dup_pct = dup_rows / n if n else 0.0
    oor_pct = out_of_range / n if n else 0.0

    status = "OK"
    reasons = []

    if n == 0:
        status = "WARN"; reasons.append("Dataset has no records")
    if dup_pct > float(g.get("max_duplicate_pct", 0.05)):
        status = "WARN"
        reasons.append(f"Duplicate natural keys too common: {dup_pct:.3f}")
    if oor_pct > float(g.get("max_rate_out_of_range_pct", 0.01)):
        status = "WARN"
        reasons.append(f"Rates outside [0, 100] too common: {oor_pct:.3f}")

    dates = df["launch_date"] if n else pd.Series(dtype="datetime64[ns]")
    return {
        "status": status,
        "n_records": n,
        "n_institutions": int(df["institution"].nunique()) if n else 0,
        "n_course_numbers": int(df["course_number"].nunique()) if n else 0,
        "launch_date_range": [
            dates.min().date().isoformat() if n else None,
            dates.max().date().isoformat() if n else None,
        ],
        "duplicate_keys": dup_rows,
        "duplicate_pct": dup_pct,
        "rates_out_of_range": out_of_range,
        "rates_out_of_range_pct": oor_pct,
        "reasons": reasons,
    }
