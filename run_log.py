"""
run_log: timestamped diagnostics for the integrator.

Lines go to stderr so stdout carries only the data pulled from sources.
If INTEGRATOR_LOG_FILE is set, every line is also appended to that file.
"""

import datetime
import os
import sys
from pathlib import Path

TAG = "integrator"
LOG_FILE_ENV = "INTEGRATOR_LOG_FILE"


def _log_file() -> Path | None:
    raw = os.environ.get(LOG_FILE_ENV, "").strip()
    return Path(raw) if raw else None


def log(msg: str) -> None:
    now = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    line = f"[{TAG} {now}] {msg}\n"
    sys.stderr.write(line)
    sys.stderr.flush()

    path = _log_file()
    if path is None:
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(line)
    except OSError as e:
        # stderr already has the line; don't let the log file sink the run.
        sys.stderr.write(f"[{TAG} {now}] could not append to {path}: {e!r}\n")
