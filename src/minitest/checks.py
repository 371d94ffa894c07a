"""Assertion helpers backing the ``TestCase`` assertion methods."""

from __future__ import annotations

import ast
import inspect
import json
from typing import Any, Callable

from minitest.result import DISCARD, Discard, TestResult

_NUMBER_TYPES = (bool, int, float)


def caller_location(stacklevel: int = 2) -> tuple[str, int, str]:
    """Return file, line and stripped source text of a calling frame.

    ``stacklevel=1`` is the function calling ``caller_location``; each extra
    level walks one frame further out.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(stacklevel):
            if frame is None or frame.f_back is None:
                break
            frame = frame.f_back
        if frame is None:
            return "<unknown>", 0, ""
        info = inspect.getframeinfo(frame, context=1)
        source = info.code_context[0].strip() if info.code_context else ""
        return info.filename, info.lineno, source
    finally:
        del frame


def _parse_line(source: str) -> tuple[ast.AST, str] | None:
    # A compound statement header such as "with x():" needs a body to parse.
    candidates = [source]
    if source.endswith(":"):
        candidates.append(f"{source} pass")
    for candidate in candidates:
        try:
            return ast.parse(candidate), candidate
        except SyntaxError:
            continue
    return None


def _find_call(source: str, method: str) -> tuple[ast.Call, str] | None:
    parsed = _parse_line(source)
    if parsed is None:
        return None
    tree, text = parsed
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        func = node.func
        name = func.attr if isinstance(func, ast.Attribute) else getattr(func, "id", None)
        if name == method:
            return node, text
    return None


def call_arguments(
    source: str, method: str, keywords: bool = False
) -> list[str] | None:
    """Source text of the arguments of the first ``method(...)`` call in *source*.

    With ``keywords=True`` keyword arguments follow the positional ones as
    ``name=value``; an ``expr=`` keyword is always left out. Returns None
    when *source* does not parse on its own (multi-line calls) or contains
    no such call.
    """
    found = _find_call(source, method)
    if found is None:
        return None
    node, text = found
    segments = [ast.get_source_segment(text, arg) for arg in node.args]
    if keywords:
        for keyword in node.keywords:
            if keyword.arg == "expr":
                continue
            value = ast.get_source_segment(text, keyword.value)
            if value is None:
                return None
            prefix = "**" if keyword.arg is None else f"{keyword.arg}="
            segments.append(prefix + value)
    if any(segment is None for segment in segments):
        return None
    return segments


def call_text(source: str, method: str) -> str | None:
    """Source text of the first ``method(...)`` call in *source*, if any."""
    found = _find_call(source, method)
    if found is None:
        return None
    node, text = found
    return ast.get_source_segment(text, node)


def _coerce(expected: Any, actual: Any) -> Any:
    if (
        isinstance(expected, _NUMBER_TYPES)
        and isinstance(actual, _NUMBER_TYPES)
        and type(expected) is not type(actual)
    ):
        try:
            return type(actual)(expected)
        except (ValueError, OverflowError):
            return expected
    return expected


def check(
    result: TestResult, condition: Any, file: str, line: int, expr: str
) -> TestResult | Discard:
    if condition:
        return DISCARD
    return result.add_failure(file, line, expr)


def check_equal(
    result: TestResult,
    expected: Any,
    actual: Any,
    file: str,
    line: int,
    expr: str,
) -> TestResult | Discard:
    expected = _coerce(expected, actual)
    if expected == actual:
        return DISCARD
    result.add_failure(file, line, expr)
    result << "Expected: " << expected << "\n"
    result << "Actual  : " << actual
    return result


def to_json_string(value: str | None) -> str:
    """Quote and escape *value* the way a JSON writer would."""
    if value is None:
        return "null"
    return json.dumps(str(value))


def check_string_equal(
    result: TestResult,
    expected: str,
    actual: str,
    file: str,
    line: int,
    expr: str,
) -> TestResult | Discard:
    if expected == actual:
        return DISCARD
    result.add_failure(file, line, expr)
    result << "Expected: " << expected << "\n"
    result << "Actual  : " << actual
    return result


def check_throws(
    result: TestResult,
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    file: str,
    line: int,
    expr: str,
) -> TestResult | Discard:
    try:
        func(*args, **kwargs)
    except Exception:
        return DISCARD
    return result.add_failure(file, line, f"expected exception thrown: {expr}")
