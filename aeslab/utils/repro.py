from __future__ import annotations

import json
import random
import time
from pathlib import Path
from typing import Any

import numpy as np


def set_global_seed(seed: int) -> None:
    random.seed(seed)
    np.random.seed(seed)


def utc_timestamp() -> str:
    # e.g. 2026-01-08T12-34-56Z (safe for filenames)
    return time.strftime("%Y-%m-%dT%H-%M-%SZ", time.gmtime())


def make_report_path(reports_root: str | Path, name: str) -> Path:
    reports_root = Path(reports_root)
    reports_root.mkdir(parents=True, exist_ok=True)
    safe = "".join(ch if ch.isalnum() or ch in {"-", "_"} else "_" for ch in name.strip())[:60]
    return reports_root / f"{utc_timestamp()}_{safe}.json"


def write_json(path: str | Path, obj: Any) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True), encoding="utf-8")


def read_json(path: str | Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))
