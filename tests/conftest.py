"""Shared fixtures for the mukadex test suite."""

import io

import pytest

from mukadex.errors import ErrorReporter
from mukadex.session import Session


class Run:
    """Result of running a program: what it printed and what was reported."""

    def __init__(self, session: Session, stdout: io.StringIO):
        self.session = session
        self._stdout = stdout

    @property
    def lines(self) -> list[str]:
        return self._stdout.getvalue().splitlines()

    @property
    def reporter(self) -> ErrorReporter:
        return self.session.reporter

    @property
    def runtime_messages(self) -> list[str]:
        return [d.message for d in self.reporter.diagnostics if d.kind == "runtime"]

    @property
    def error_messages(self) -> list[str]:
        return [d.message for d in self.reporter.errors]


@pytest.fixture
def reporter():
    return ErrorReporter(stream=io.StringIO(), color=False)


@pytest.fixture
def run():
    """Run source in a fresh session and return a Run."""

    def _run(source: str, warn_unused: bool = False) -> Run:
        stdout = io.StringIO()
        reporter = ErrorReporter(stream=io.StringIO(), color=False)
        session = Session(stdout=stdout, reporter=reporter, warn_unused=warn_unused)
        session.run(source)
        return Run(session, stdout)

    return _run
