from __future__ import annotations
import pandas as pd

def build_instructor_index(df: pd.DataFrame) -> dict[str, list[int]]:
    """Map each instructor name to the row positions listing it.

    Built once from the pre-parsed ``instructor_names`` column; a row that lists
    the same name twice is indexed once.
    """
    index: dict[str, list[int]] = {}
    for pos, names in enumerate(df["instructor_names"]):
        for name in dict.fromkeys(names):
            index.setdefault(name, []).append(pos)
    return index

def instructor_course_lists(df: pd.DataFrame, index: dict[str, list[int]] | None = None) -> dict[str, tuple[list[str], list[str]]]:
    if index is None:
        index = build_instructor_index(df)
    names = df["instructor_names"].tolist()
    titles = df["course_title"].astype(str).tolist()

    out = {}
    for name in sorted(index):
        solo, co = set(), set()
        for pos in index[name]:
            # whole-name membership: "Bo" never matches a row listing only "Bob"
            if names[pos] == (name,):
                solo.add(titles[pos])
            else:
                co.add(titles[pos])
        out[name] = (sorted(solo), sorted(co))
    return out
