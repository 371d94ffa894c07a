from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, field_validator


class RunnerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    modules: list[str] = []
    catch_exceptions: bool = True
    print_summary: bool = True
    debug_log: str | None = None

    @field_validator("modules")
    @classmethod
    def modules_must_be_python_files(cls, v: list[str]) -> list[str]:
        for module in v:
            if not module.endswith(".py"):
                raise ValueError(f"Test module '{module}' must be a .py file")
        return v


def load_config(path: Path) -> RunnerConfig:
    """Load and validate a runner config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Expected a mapping at the top level of {path}")

    config = RunnerConfig(**raw)

    # Resolve relative paths relative to config file location
    config.modules = [
        str((config_dir / module).resolve())
        if not Path(module).is_absolute()
        else module
        for module in config.modules
    ]
    if config.debug_log and not Path(config.debug_log).is_absolute():
        config.debug_log = str((config_dir / config.debug_log).resolve())

    return config
