"""Run the tersite test suite with the project's virtualenv interpreter when one exists."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

VENV_NAMES = (".venv", "venv")


def find_interpreter(root: Path) -> str:
    bin_dir, executable = ("Scripts", "python.exe") if os.name == "nt" else ("bin", "python")
    for name in VENV_NAMES:
        candidate = root / name / bin_dir / executable
        if candidate.exists():
            return str(candidate)
    return sys.executable


def main(argv: list[str] | None = None) -> int:
    root = Path(__file__).resolve().parents[1]
    extra = list(argv or [])
    targets = [] if any(not arg.startswith("-") for arg in extra) else ["tests"]
    cmd = [find_interpreter(root), "-m", "pytest", "-q", *targets, *extra]
    return subprocess.call(cmd, cwd=root)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
