"""Bootstrap entry point for swcoupling.

Attaches a file log to the package logger before the CLI runs and keeps a
crash log of any unhandled exception.
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from pathlib import Path


def _log_dir() -> Path:
    """Return a writable directory for boot/crash logs."""
    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("TEMP") or "."
    else:
        base = os.environ.get("XDG_STATE_HOME") or os.path.expanduser("~/.local/state")
    d = Path(base) / "swcoupling" / "logs"
    try:
        d.mkdir(parents=True, exist_ok=True)
    except OSError:
        d = Path(os.environ.get("TEMP", "/tmp")) / "swcoupling_logs"
        d.mkdir(parents=True, exist_ok=True)
    return d


def _setup_logging() -> logging.Logger:
    root = logging.getLogger("swcoupling")
    root.setLevel(logging.DEBUG if os.environ.get("SWCOUPLING_DEBUG") else logging.INFO)
    try:
        fh = logging.FileHandler(_log_dir() / "boot.log", encoding="utf-8", delay=False)
        fh.setFormatter(logging.Formatter("%(asctime)s  %(levelname)s  %(name)s  %(message)s"))
        root.addHandler(fh)
    except OSError:
        pass  # no file log; CLI output still reaches the console
    return logging.getLogger("swcoupling.boot")


def _entry() -> None:
    log = _setup_logging()
    log.info("boot: argv=%s  executable=%s  cwd=%s", sys.argv, sys.executable, os.getcwd())

    from swcoupling import __version__

    log.info("swcoupling version: %s  python: %s", __version__, sys.version)

    try:
        from swcoupling.cli import main

        main()
    except SystemExit as exc:
        log.info("CLI exited with code %s", exc.code)
        raise
    except Exception:
        tb = traceback.format_exc()
        crash_file = _log_dir() / "crash.log"
        crash_file.write_text(tb, encoding="utf-8")
        log.critical("unhandled exception:\n%s", tb)
        print(tb.splitlines()[-1], file=sys.stderr)
        print(f"Full traceback saved to: {crash_file}", file=sys.stderr)
        raise SystemExit(1) from None


if __name__ == "__main__":
    _entry()
