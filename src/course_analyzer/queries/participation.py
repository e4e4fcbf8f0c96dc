from __future__ import annotations
import pandas as pd

def participation_by_institution(df: pd.DataFrame) -> dict[str, int]:
    totals = df.groupby("institution", sort=True)["participants"].sum()
    return {str(k): int(v) for k, v in totals.items()}

def participation_by_institution_subject(df: pd.DataFrame) -> dict[str, int]:
    # grouped on the raw subject string, not on individual subjects
    key = df["institution"] + "-" + df["subjects"]
    totals = df["participants"].groupby(key).sum().rename("total").reset_index()
    totals.columns = ["key", "total"]
    totals = totals.sort_values(["total", "key"], ascending=[False, True], kind="mergesort")
    return {str(k): int(v) for k, v in zip(totals["key"], totals["total"])}
