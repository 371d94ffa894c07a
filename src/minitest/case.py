"""Test case base class and fixture registration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, ClassVar, Iterator

from minitest import registry
from minitest.checks import (
    call_arguments,
    call_text,
    caller_location,
    check,
    check_equal,
    check_string_equal,
    check_throws,
    to_json_string,
)
from minitest.registry import TestCaseFactory
from minitest.result import DISCARD, Discard, TestResult


def _comparison_text(source: str, method: str) -> str:
    args = call_arguments(source, method)
    if not args or len(args) < 2:
        return source
    return f"{args[0]} == {args[1]}"


def _call_text(source: str, method: str) -> str:
    args = call_arguments(source, method, keywords=True)
    if not args:
        return source
    return f"{args[0]}({', '.join(args[1:])})"


class TestCase(ABC):
    """A unit of test behavior, run once against a single ``TestResult``.

    Fixtures subclass ``TestCase`` to hold shared helpers and state; concrete
    cases implement ``run_test_case``. All assertion methods record failures
    on the bound result and let the test body continue. They return the
    result when they fail so diagnostic text can be chained on::

        self.assert_true(x == y) << "x=" << x << ", y=" << y
    """

    __test__ = False

    name: ClassVar[str] = ""

    def __init__(self) -> None:
        self.result: TestResult | None = None

    def run(self, result: TestResult) -> None:
        self.result = result
        self.run_test_case()

    def test_name(self) -> str:
        return self.name or type(self).__name__

    @abstractmethod
    def run_test_case(self) -> None:
        """Body of the test."""
        ...

    def _bound(self) -> TestResult:
        if self.result is None:
            raise RuntimeError(f"{self.test_name()} is not bound to a TestResult")
        return self.result

    def assert_true(self, condition: Any, expr: str | None = None) -> TestResult | Discard:
        file, line, source = caller_location()
        if expr is None:
            args = call_arguments(source, "assert_true")
            expr = args[0] if args else source
        return check(self._bound(), condition, file, line, expr)

    def assert_equal(
        self, expected: Any, actual: Any, expr: str | None = None
    ) -> TestResult | Discard:
        file, line, source = caller_location()
        if expr is None:
            expr = _comparison_text(source, "assert_equal")
        return check_equal(self._bound(), expected, actual, file, line, expr)

    def assert_string_equal(
        self, expected: str | None, actual: str | None, expr: str | None = None
    ) -> TestResult | Discard:
        file, line, source = caller_location()
        if expr is None:
            expr = _comparison_text(source, "assert_string_equal")
        return check_string_equal(
            self._bound(),
            to_json_string(expected),
            to_json_string(actual),
            file,
            line,
            expr,
        )

    def assert_throws(
        self,
        func: Callable[..., Any],
        *args: Any,
        expr: str | None = None,
        **kwargs: Any,
    ) -> TestResult | Discard:
        file, line, source = caller_location()
        if expr is None:
            expr = _call_text(source, "assert_throws")
        return check_throws(self._bound(), func, args, kwargs, file, line, expr)

    def assert_pred(
        self,
        func: Callable[..., Any],
        *args: Any,
        expr: str | None = None,
        **kwargs: Any,
    ) -> TestResult | Discard:
        """Run *func* as a predicate: assertions it makes are reported under it."""
        file, line, source = caller_location()
        if expr is None:
            expr = _call_text(source, "assert_pred")
        result = self._bound()
        with result.predicate(file, line, expr) as context:
            func(*args, **kwargs)
        if context.failure_index is None:
            return DISCARD
        return result

    @contextmanager
    def predicate(self, expr: str | None = None) -> Iterator[TestResult]:
        """Report assertions made inside the block under one predicate frame."""
        file, line, source = caller_location(3)
        result = self._bound()
        if expr is None:
            expr = call_text(source, "predicate") or source
        with result.predicate(file, line, expr):
            yield result


def fixture(
    fixture_type: type[TestCase],
    collection: list[TestCaseFactory] | None = None,
) -> Callable[[Callable[[Any], None]], type[TestCase]]:
    """Declare a test case of *fixture_type* whose body is the decorated function.

    The case is named ``<Fixture>/<function name>`` and its class is appended
    to *collection*, or to the default registry when no collection is given.
    """

    def decorator(func: Callable[[Any], None]) -> type[TestCase]:
        case_name = func.__name__
        case_class = type(fixture_type)(
            f"Test{fixture_type.__name__}{case_name}",
            (fixture_type,),
            {
                "name": f"{fixture_type.__name__}/{case_name}",
                "run_test_case": func,
                "__module__": func.__module__,
                "__doc__": func.__doc__,
            },
        )
        if collection is None:
            registry.register(case_class)
        else:
            collection.append(case_class)
        return case_class

    return decorator
