"""
Tests for the dashboard launcher
"""

import subprocess
import sys
from types import SimpleNamespace

from brewboard import run_dashboard


def test_build_command_runs_app_with_port():
    cmd = run_dashboard.build_command(8600, ["--theme.base", "dark"])
    assert cmd[:4] == [sys.executable, "-m", "streamlit", "run"]
    assert cmd[4].endswith("app.py")
    assert cmd[cmd.index("--server.port") + 1] == "8600"
    assert cmd[-2:] == ["--theme.base", "dark"]


def test_main_passes_home_and_extra_options(monkeypatch, tmp_path):
    calls = []

    def fake_run(cmd, env):
        calls.append((cmd, env))
        return SimpleNamespace(returncode=0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    code = run_dashboard.main(["--port", "9000", "--home", str(tmp_path), "--logger.level", "debug"])

    assert code == 0
    cmd, env = calls[0]
    assert cmd[cmd.index("--server.port") + 1] == "9000"
    assert cmd[-2:] == ["--logger.level", "debug"]
    assert env["BREWBOARD_HOME"] == str(tmp_path.resolve())
