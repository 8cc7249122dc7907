"""
Nox sessions for tokenvm and the Fan Token contracts.

Sessions:
  - lint  : ruff + black (check) over Python sources
  - unit  : pytest (tokenvm runtime + contracts suites), with coverage
  - cov   : combine parallel coverage and produce reports

Pass extra args to pytest like:
  nox -s unit -- -k "upgrade and not random" -vv
"""

from __future__ import annotations

from pathlib import Path

import nox

nox.options.reuse_venv = True
nox.options.stop_on_first_error = False

REPO_ROOT = Path(__file__).resolve().parent
PY_PATHS = ["tokenvm", "stdlib", "contracts", "noxfile.py"]

TEST_PYTHONS = ["3.10", "3.11", "3.12"]


def _install_test_stack(session: nox.Session) -> None:
    session.run("python", "-m", "pip", "install", "--upgrade", "pip", silent=True)
    session.install("-e", f"{REPO_ROOT}[test]")
    session.env.setdefault("PYTHONUNBUFFERED", "1")


@nox.session(name="lint", python="3.11")
def lint(session: nox.Session) -> None:
    """Static analysis: ruff, black (check)."""
    session.install("ruff>=0.6.0", "black>=24.3.0")
    session.run("ruff", "check", *PY_PATHS)
    session.run("black", "--check", *PY_PATHS)


@nox.session(name="unit", python=TEST_PYTHONS)
def unit(session: nox.Session) -> None:
    """Full unit suite, parallel coverage data per interpreter."""
    _install_test_stack(session)
    session.install("coverage>=7.4.0")
    session.run(
        "coverage",
        "run",
        "--parallel-mode",
        "--source=tokenvm,contracts,stdlib",
        "-m",
        "pytest",
        "-q",
        *session.posargs,
    )


@nox.session(name="cov", python="3.11")
def cov(session: nox.Session) -> None:
    """
    Combine & report coverage from parallel runs.
    Usage:
      nox -s unit-3.11 unit-3.12
      nox -s cov
    """
    session.install("coverage>=7.4.0")
    with session.chdir(str(REPO_ROOT)):
        session.run("coverage", "combine")
        session.run("coverage", "report", "-m")
