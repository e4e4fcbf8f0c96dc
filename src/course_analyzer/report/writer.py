from __future__ import annotations
from pathlib import Path
from .logging import write_json, ensure_dir

def write_outputs(results: dict, quality: dict, out_dir: str = "out") -> None:
    ensure_dir(out_dir)
    write_json(str(Path(out_dir) / "results.json"), results)
    write_json(str(Path(out_dir) / "quality_report.json"), quality)
