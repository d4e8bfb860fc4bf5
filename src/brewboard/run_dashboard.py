"""
BrewBoard Launcher
==================

Starts the Streamlit app for the coffee shop dashboard.

Usage:
    brewboard [--port PORT] [--home DIR] [extra streamlit options]

``--home`` points the app at a workspace (sets BREWBOARD_HOME), so the
local store and log file land under that directory.
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

APP_PATH = Path(__file__).parent / "dashboard" / "app.py"


def build_command(port: int = 8501, extra: Optional[List[str]] = None) -> List[str]:
    """Command line for ``streamlit run`` on the dashboard app"""
    return [
        sys.executable, "-m", "streamlit", "run",
        str(APP_PATH),
        "--server.port", str(port),
        "--server.headless", "true",
        "--browser.gatherUsageStats", "false",
    ] + list(extra or [])


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Run the BrewBoard admin dashboard")
    parser.add_argument("--port", type=int, default=8501, help="Port to serve on")
    parser.add_argument("--home", type=str, default=None,
                        help="Workspace directory for local storage and logs")
    return parser.parse_known_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args, extra = parse_args(argv)

    if not APP_PATH.exists():
        print(f"Dashboard app not found at {APP_PATH}")
        return 1

    env = dict(os.environ)
    if args.home:
        env["BREWBOARD_HOME"] = str(Path(args.home).resolve())

    print(f"☕ BrewBoard on http://localhost:{args.port}  (Ctrl+C to stop)")
    try:
        return subprocess.run(build_command(args.port, extra), env=env).returncode
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
