# pathviz/config.py
#!/usr/bin/env python3
"""
Start-up settings.

- ENV: PATHVIZ_ROWS, PATHVIZ_COLS, PATHVIZ_VISIT_DELAY_MS, PATHVIZ_PATH_DELAY_MS,
       PATHVIZ_PACING, PATHVIZ_LOG_LEVEL
- CLI: --rows=, --cols=, --visit-delay=, --path-delay=, --pacing=, --log-level=

CLI flags win over the environment.
"""

import os
import sys
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

PACINGS = ("reference", "fixed", "none")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# setting -> (env var, cli flag, default)
_SOURCES = {
    "rows":           ("PATHVIZ_ROWS",           "--rows",        "25"),
    "cols":           ("PATHVIZ_COLS",           "--cols",        "50"),
    "visit_delay_ms": ("PATHVIZ_VISIT_DELAY_MS", "--visit-delay", "50"),
    "path_delay_ms":  ("PATHVIZ_PATH_DELAY_MS",  "--path-delay",  "30"),
    "pacing":         ("PATHVIZ_PACING",         "--pacing",      "reference"),
    "log_level":      ("PATHVIZ_LOG_LEVEL",      "--log-level",   "WARNING"),
}


@dataclass(frozen=True)
class Settings:
    rows: int = 25
    cols: int = 50
    visit_delay_ms: int = 50
    path_delay_ms: int = 30
    pacing: str = "reference"
    log_level: str = "WARNING"


def _raw_values(argv: Sequence[str], env: Mapping[str, str]) -> Dict[str, str]:
    values = {key: env.get(var, default) for key, (var, _flag, default) in _SOURCES.items()}
    for arg in argv:
        for key, (_var, flag, _default) in _SOURCES.items():
            if arg.startswith(flag + "="):
                values[key] = arg.split("=", 1)[1]
    return values


def _int(key: str, raw: str, minimum: int) -> int:
    try:
        v = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if v < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {v}")
    return v


def load_settings(argv: Optional[Sequence[str]] = None,
                  env: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    env = os.environ if env is None else env
    raw = _raw_values(argv, env)

    pacing = raw["pacing"].lower()
    if pacing not in PACINGS:
        raise ValueError(f"pacing must be one of {PACINGS}, got {raw['pacing']!r}")
    level = raw["log_level"].upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {raw['log_level']!r}")

    return Settings(
        rows=_int("rows", raw["rows"], 1),
        cols=_int("cols", raw["cols"], 1),
        visit_delay_ms=_int("visit_delay_ms", raw["visit_delay_ms"], 0),
        path_delay_ms=_int("path_delay_ms", raw["path_delay_ms"], 0),
        pacing=pacing,
        log_level=level,
    )
