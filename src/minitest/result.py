"""Failure accumulation for a single test run.

A ``TestResult`` records assertion failures without interrupting the test
body. Predicate assertions (assertions that call other assertions) push a
``PredicateContext`` frame while they run; when a nested assertion fails,
every frame of the chain that has not been reported yet is turned into a
``Failure`` so the printed report shows the full call chain, indented by
depth.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from minitest.failure import Failure


@dataclass
class PredicateContext:
    """A predicate assertion currently being evaluated."""

    id: int
    file: str | None
    line: int
    expr: str
    # Index into TestResult failures, set once the frame has been reported.
    failure_index: int | None = None


def format_value(value: Any) -> str:
    """Text rendering used by the ``<<`` message operator."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:.16g}"
    return str(value)


class TestResult:
    """Failures and predicate call chain of one test case run."""

    __test__ = False

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._failures: list[Failure] = []
        # Frames pushed after the implicit root (id 0), oldest first.
        self._predicate_stack: list[PredicateContext] = []
        self._next_predicate_id = 1
        self._last_used_predicate_id = 0
        self._message_target: int | None = None

    def set_test_name(self, name: str) -> None:
        self.name = name

    @property
    def failures(self) -> tuple[Failure, ...]:
        return tuple(self._failures)

    @property
    def predicate_depth(self) -> int:
        return len(self._predicate_stack)

    @property
    def message_target(self) -> Failure | None:
        if self._message_target is None:
            return None
        return self._failures[self._message_target]

    def push_predicate_context(
        self, file: str | None, line: int, expr: str
    ) -> PredicateContext:
        """Link a new frame at the tail of the predicate chain."""
        context = PredicateContext(
            id=self._next_predicate_id, file=file, line=line, expr=expr
        )
        self._next_predicate_id += 1
        self._predicate_stack.append(context)
        return context

    def pop_predicate_context(self) -> TestResult:
        """Remove the tail frame of the predicate chain.

        If a nested assertion failed while the frame was active, subsequent
        messages are directed at the frame's own failure record.
        """
        if not self._predicate_stack:
            return self
        context = self._predicate_stack.pop()
        if context.failure_index is not None:
            self._message_target = context.failure_index
        return self

    @contextmanager
    def predicate(
        self, file: str | None, line: int, expr: str
    ) -> Iterator[PredicateContext]:
        context = self.push_predicate_context(file, line, expr)
        try:
            yield context
        finally:
            self.pop_predicate_context()

    def add_failure(
        self, file: str | None, line: int, expr: str | None = None
    ) -> TestResult:
        """Record a failed assertion, preceded by any unreported predicate frames."""
        nesting_level = 0
        for context in self._predicate_stack:
            if context.id > self._last_used_predicate_id:
                self._last_used_predicate_id = context.id
                context.failure_index = self._add_failure_info(
                    context.file, context.line, context.expr, nesting_level
                )
            nesting_level += 1

        self._message_target = self._add_failure_info(
            file, line, expr, nesting_level
        )
        return self

    def _add_failure_info(
        self, file: str | None, line: int, expr: str | None, nesting_level: int
    ) -> int:
        self._failures.append(
            Failure(file=file, line=line, expr=expr or "", nesting_level=nesting_level)
        )
        return len(self._failures) - 1

    def add_to_last_failure(self, message: str) -> TestResult:
        if self._message_target is not None:
            self._failures[self._message_target].message += message
        return self

    def __lshift__(self, value: Any) -> TestResult:
        return self.add_to_last_failure(format_value(value))

    def failed(self) -> bool:
        return bool(self._failures)

    def print_failure(self, print_test_name: bool) -> None:
        if not self._failures:
            return

        if print_test_name:
            print(f"* Detail of {self.name} test failure:")

        # Insertion order puts each call chain before the failure it led to.
        for failure in self._failures:
            print(failure.render(), end="")


class Discard:
    """Message sink returned by assertions that passed."""

    def __lshift__(self, value: Any) -> Discard:
        return self


DISCARD = Discard()
