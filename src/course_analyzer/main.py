from __future__ import annotations
import argparse
from pathlib import Path

from .report.logging import load_config, log, write_json, ensure_dir, set_log_path
from .report.writer import write_outputs
from .table import CourseTable

def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="course-analyzer")
    ap.add_argument("data", help="course offerings CSV")
    ap.add_argument("--config", default="config/analyzer.yaml")
    ap.add_argument("--out", default="out")
    ap.add_argument("--top-k", type=int, default=None)
    ap.add_argument("--by", default=None, help="hours or participants")
    ap.add_argument("--subject", default=None)
    ap.add_argument("--min-audited", type=float, default=None)
    ap.add_argument("--max-hours", type=float, default=None)
    ap.add_argument("--recommend", type=int, nargs=3, default=None, metavar=("AGE", "GENDER", "BACHELOR"))
    return ap

def _apply_overrides(cfg: dict, args: argparse.Namespace) -> dict:
    q = cfg.setdefault("queries", {})
    if args.top_k is not None:
        q["top_k"] = int(args.top_k)
    if args.by is not None:
        q["by"] = args.by
    s = q.setdefault("search", {})
    if args.subject is not None:
        s["subject"] = args.subject
    if args.min_audited is not None:
        s["min_audited_rate"] = float(args.min_audited)
    if args.max_hours is not None:
        s["max_total_hours"] = float(args.max_hours)
    if args.recommend is not None:
        age, gender, bachelor = args.recommend
        q["recommend"] = {"age": age, "gender": gender, "bachelor": bachelor}
    return cfg

def run_queries(table: CourseTable, cfg: dict) -> dict:
    q = cfg["queries"]
    s = q["search"]
    r = q["recommend"]
    return {
        "participation_by_institution": table.participation_by_institution(),
        "participation_by_institution_subject": table.participation_by_institution_subject(),
        "instructor_course_lists": table.instructor_course_lists(),
        "top_courses": {
            "k": int(q["top_k"]), "by": q["by"],
            "titles": table.top_courses(int(q["top_k"]), q["by"]),
        },
        "search_courses": {
            **s,
            "titles": table.search_courses(s["subject"], float(s["min_audited_rate"]), float(s["max_total_hours"])),
        },
        "recommend": {
            **r,
            "titles": table.recommend(int(r["age"]), int(r["gender"]), int(r["bachelor"])),
        },
    }

def cli(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    cfg = _apply_overrides(load_config(args.config), args)

    out = ensure_dir(args.out)
    set_log_path(out / "run.log")
    (out / "run.log").write_text("", encoding="utf-8")
    log(f"course-analyzer starting ({args.data})")

    try:
        table = CourseTable.from_config(args.data, cfg)
        quality = table.quality_report(cfg)
        log(f"Quality: {quality['status']} | records={quality['n_records']} | institutions={quality['n_institutions']}")

        results = run_queries(table, cfg)
        write_outputs(results, quality, str(out))

        if quality["status"] != "OK":
            for reason in quality["reasons"]:
                log(f"WARN: {reason}")
            return 2

        log("Done")
        return 0

    except Exception as e:
        err = {"status": "FAIL", "error": str(e)}
        write_json(str(Path(out) / "FAIL.json"), err)
        log(f"FATAL: {e}")
        return 3
