"""Sequential execution of registered test cases."""

from __future__ import annotations

import logging
import traceback
from typing import Sequence

from minitest.registry import TestCaseFactory
from minitest.result import TestResult


class Runner:
    """Runs registered test cases one at a time and reports their failures."""

    def __init__(
        self,
        catch_exceptions: bool = True,
        logger: logging.Logger | None = None,
    ):
        self._tests: list[TestCaseFactory] = []
        self.catch_exceptions = catch_exceptions
        self.logger = logger or logging.getLogger("minitest")

    def add(self, factory: TestCaseFactory) -> Runner:
        """Adds a test to the suite."""
        self._tests.append(factory)
        return self

    def test_count(self) -> int:
        return len(self._tests)

    def test_name_at(self, index: int) -> str:
        test = self._tests[index]()
        return test.test_name()

    def test_index(self, test_name: str) -> int | None:
        """Index of the test named *test_name*, or None if there is none."""
        for index in range(self.test_count()):
            if self.test_name_at(index) == test_name:
                return index
        return None

    def run_test_at(self, index: int, result: TestResult) -> None:
        """Run the test at *index*, recording its failures in *result*."""
        test = self._tests[index]()
        name = test.test_name()
        result.set_test_name(name)
        print(f"Testing {name}: ", end="", flush=True)
        self.logger.debug(f"Running test '{name}'")

        try:
            test.run(result)
        except Exception as e:
            if not self.catch_exceptions:
                raise
            self.logger.debug(f"Test '{name}' raised {type(e).__name__}: {e}")
            frame = traceback.extract_tb(e.__traceback__)[-1]
            result.add_failure(
                frame.filename, frame.lineno or 0, "Unexpected exception caught:"
            ) << f"{type(e).__name__}: {e}"
        finally:
            del test

        status = "FAILED" if result.failed() else "OK"
        print(status, flush=True)
        self.logger.debug(
            f"Test '{name}' {status} ({len(result.failures)} failure record(s))"
        )

    def run_all_test(self, print_summary: bool = True) -> bool:
        """Run every test with a fresh result. Returns True if all passed."""
        count = self.test_count()
        failures: list[TestResult] = []
        for index in range(count):
            result = TestResult()
            self.run_test_at(index, result)
            if result.failed():
                failures.append(result)

        self.logger.debug(f"Ran {count} test(s), {len(failures)} failed")

        if not failures:
            if print_summary:
                print(f"All {count} tests passed")
            return True

        for result in failures:
            result.print_failure(count > 1)

        if print_summary:
            failed_count = len(failures)
            passed_count = count - failed_count
            print(
                f"{passed_count}/{count} tests passed ({failed_count} failure(s))"
            )
        return False

    def list_tests(self) -> None:
        for index in range(self.test_count()):
            print(self.test_name_at(index))

    def run_test_named(self, test_name: str) -> int:
        """Run a single test by name and return the process exit code."""
        index = self.test_index(test_name)
        if index is None:
            print(f"Test '{test_name}' does not exist!")
            return 1
        result = TestResult()
        self.run_test_at(index, result)
        result.print_failure(False)
        return 1 if result.failed() else 0

    def run_command_line(
        self, argv: Sequence[str], prog_name: str = "minitest"
    ) -> int:
        """Run tests as selected by command-line arguments.

        With no arguments every test runs. ``--list-tests`` prints the name of
        each test and ``--test NAME`` runs only the named test.
        """
        from minitest.cli import build_app
        import typer

        command = typer.main.get_command(build_app(self))
        try:
            command.main(args=list(argv), prog_name=prog_name)
        except SystemExit as e:
            if e.code is None:
                return 0
            return e.code if isinstance(e.code, int) else 1
        return 0
