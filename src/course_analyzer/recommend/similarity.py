from __future__ import annotations
import numpy as np
import pandas as pd

from ..queries.ranking import distinct_titles

PROFILE_COLS = ["median_age", "male_rate", "bachelors_rate"]

def latest_run_mask(df: pd.DataFrame) -> pd.Series:
    # every row tied on its course number's latest launch date stays a candidate
    if df.empty:
        return pd.Series(False, index=df.index, dtype=bool)
    latest = df.groupby("course_number")["launch_date"].transform("max")
    return df["launch_date"] == latest

def course_profiles(df: pd.DataFrame) -> pd.DataFrame:
    """Mean demographic profile per course number, over its full history."""
    return df.groupby("course_number")[PROFILE_COLS].mean()

def score_candidates(candidates: pd.DataFrame, profiles: pd.DataFrame, age: float, gender: int, bachelor: int,
                     scale: float = 100.0) -> pd.Series:
    prof = profiles.reindex(candidates["course_number"]).to_numpy(dtype=float)
    query = np.array([float(age), float(gender) * scale, float(bachelor) * scale])
    dist = ((prof - query) ** 2).sum(axis=1)
    return pd.Series(dist, index=candidates.index, name="SIMILARITY")

def recommend(df: pd.DataFrame, age: float, gender: int, bachelor: int, limit: int = 10,
              scale: float = 100.0, latest_mask: pd.Series | None = None,
              profiles: pd.DataFrame | None = None) -> list[str]:
    if latest_mask is None:
        latest_mask = latest_run_mask(df)
    if profiles is None:
        profiles = course_profiles(df)
    cand = df.loc[latest_mask, ["course_number", "course_title"]].copy()
    cand["SIMILARITY"] = score_candidates(cand, profiles, age, gender, bachelor, scale=scale)
    ordered = cand.sort_values(["SIMILARITY", "course_title"], ascending=[True, True], kind="mergesort")
    return distinct_titles(ordered, limit)
