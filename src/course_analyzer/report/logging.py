from __future__ import annotations
from pathlib import Path
import copy
import json
from datetime import datetime, timezone
import yaml

LOG_PATH = Path("out/run.log")

DEFAULT_CONFIG = {
    "load": {"date_format": "%m/%d/%Y"},
    "recommend": {"limit": 10, "scale": 100.0},
    "queries": {
        "top_k": 10,
        "by": "hours",
        "search": {"subject": "computer", "min_audited_rate": 20.0, "max_total_hours": 700.0},
        "recommend": {"age": 25, "gender": 1, "bachelor": 1},
    },
    "guardrails": {"max_duplicate_pct": 0.05, "max_rate_out_of_range_pct": 0.01},
}

def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")

def set_log_path(path) -> Path:
    global LOG_PATH
    LOG_PATH = Path(path)
    return LOG_PATH

def log(msg: str) -> None:
    LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(LOG_PATH, "a", encoding="utf-8") as f:
        f.write(f"[{now_utc_iso()}] {msg}\n")

def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def _merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out

def load_config(path: str | None = None) -> dict:
    # defaults first, file values on top; a missing file is not an error
    if path is None or not Path(path).exists():
        return _merge(DEFAULT_CONFIG, {})
    return _merge(DEFAULT_CONFIG, load_yaml(path))

def write_json(path: str, obj) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, sort_keys=False, ensure_ascii=False)

def ensure_dir(path: str) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p
