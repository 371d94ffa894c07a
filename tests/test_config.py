"""Tests for config loading and validation."""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from minitest.config import RunnerConfig, load_config


def _example_configs() -> list[Path]:
    repo_root = Path(__file__).resolve().parents[1]
    examples_dir = repo_root / "examples"
    return sorted(p for p in examples_dir.glob("*.yaml") if p.is_file())


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str) -> Path:
        p = tmp_path / "minitest.yaml"
        p.write_text(textwrap.dedent(content))
        return p

    return _write


def test_defaults():
    cfg = RunnerConfig()
    assert cfg.modules == []
    assert cfg.catch_exceptions is True
    assert cfg.print_summary is True
    assert cfg.debug_log is None


def test_empty_file_gives_defaults(tmp_yaml):
    cfg = load_config(tmp_yaml(""))
    assert cfg == RunnerConfig()


def test_load_full_config(tmp_yaml, tmp_path):
    path = tmp_yaml("""\
        modules:
          - tests/value_test.py
          - /abs/other_test.py
        catch_exceptions: false
        print_summary: false
        debug_log: logs/debug.log
    """)
    cfg = load_config(path)
    assert cfg.modules == [
        str((tmp_path / "tests" / "value_test.py").resolve()),
        "/abs/other_test.py",
    ]
    assert cfg.catch_exceptions is False
    assert cfg.print_summary is False
    assert cfg.debug_log == str((tmp_path / "logs" / "debug.log").resolve())


def test_unknown_key_rejected(tmp_yaml):
    with pytest.raises(ValidationError):
        load_config(tmp_yaml("paralel: 4\n"))


def test_non_python_module_rejected(tmp_yaml):
    with pytest.raises(ValidationError, match="must be a .py file"):
        load_config(tmp_yaml("modules: [tests/data.txt]\n"))


def test_top_level_must_be_mapping(tmp_yaml):
    with pytest.raises(ValueError, match="mapping"):
        load_config(tmp_yaml("- a\n- b\n"))


@pytest.mark.parametrize("path", _example_configs(), ids=lambda p: p.name)
def test_example_configs_load(path):
    cfg = load_config(path)
    assert cfg.modules
    for module in cfg.modules:
        assert Path(module).is_file()
