"""Failure records collected by a test result."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Failure:
    """One line-item of a failure report.

    Attributes:
        file: Source file of the assertion, or None for a message-only record.
        line: Source line, meaningful only when ``file`` is set.
        expr: Assertion text. Empty for a context frame with no expression.
        message: Diagnostic text appended after creation.
        nesting_level: Depth in the predicate call chain when recorded.
            Only used for indentation.
    """

    file: str | None = None
    line: int = 0
    expr: str = ""
    message: str = ""
    nesting_level: int = 0

    def indent(self) -> str:
        return "  " * self.nesting_level

    def render(self) -> str:
        """Render the record as printed by ``TestResult.print_failure``."""
        indent = self.indent()
        out = ""
        if self.file:
            out += f"{indent}{self.file}({self.line}): "
        if self.expr:
            out += f"{self.expr}\n"
        elif self.file:
            out += "\n"
        if self.message:
            out += indent_text(self.message, indent + "  ") + "\n"
        return out


def indent_text(text: str, indent: str) -> str:
    """Prefix every line of *text* with *indent*, keeping line endings."""
    return "".join(indent + line for line in text.splitlines(keepends=True))
