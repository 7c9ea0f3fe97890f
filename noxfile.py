"""Nox sessions for dirplay development tasks."""

from __future__ import annotations

import nox

nox.options.error_on_missing_interpreters = False
nox.options.sessions = ["lint", "typecheck", "tests"]

PACKAGE = "src/dirplay"


def _ruff(session: nox.Session, *, fix: bool, external: bool = False) -> None:
    check = ["ruff", "check", "."] + (["--fix"] if fix else [])
    fmt = ["ruff", "format", "."] + ([] if fix else ["--check"])
    if external:
        session.run("python", "-m", *check, external=True)
        session.run("python", "-m", *fmt, external=True)
    else:
        session.run(*check)
        session.run(*fmt)


@nox.session
def lint(session: nox.Session) -> None:
    """Run ruff linting and formatting checks."""
    session.install("ruff")
    _ruff(session, fix=False)


@nox.session(name="lint-fix")
def lint_fix(session: nox.Session) -> None:
    """Apply ruff fixes and formatting."""
    session.install("ruff")
    _ruff(session, fix=True)


@nox.session
def tests(session: nox.Session) -> None:
    """Run pytest with libvlc-dependent tests skipped."""
    session.install("-e", ".[dev]")
    session.run("pytest", "-q", env={"DIRPLAY_CI": "1"})


@nox.session
def typecheck(session: nox.Session) -> None:
    """Run mypy against the package."""
    session.install("-e", ".[dev]")
    session.run("mypy", PACKAGE)


@nox.session
def coverage(session: nox.Session) -> None:
    """Run the suite under coverage and enforce a floor."""
    session.install("-e", ".[dev]", "coverage")
    session.run("coverage", "run", "--source=dirplay", "-m", "pytest")
    session.run("coverage", "report", "--fail-under=80", "-m")


@nox.session
def build(session: nox.Session) -> None:
    """Build sdist and wheel artifacts."""
    session.install("build")
    session.run("python", "-m", "build")


@nox.session(name="dev", venv_backend="none")
def dev(session: nox.Session) -> None:
    """Fast local lint and tests using the active environment."""
    _ruff(session, fix=False, external=True)
    session.run("python", "-m", "pytest", "-q", external=True)
