"""Lightweight test harness with non-aborting, nestable assertions."""

from minitest.case import TestCase, fixture
from minitest.failure import Failure
from minitest.registry import TestCaseFactory
from minitest.result import PredicateContext, TestResult
from minitest.runner import Runner

__all__ = [
    "Failure",
    "PredicateContext",
    "Runner",
    "TestCase",
    "TestCaseFactory",
    "TestResult",
    "fixture",
]
