# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for advent.

Each config section gets its own frozen pydantic model. Once loaded, a
config cannot be mutated.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

A config file looks like:

    global:
      config_version: "1.0.0"
      log_level: INFO
    engine:
      config_version: "1.0.0"
      selectors: ["advent.nineteen"]
      input_root: "."
      max_workers: 4
    report:
      config_version: "1.0.0"
      output_directory: reports
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from advent.engine.resources import DEFAULT_INPUT_PATTERN


class GlobalConfig(BaseModel):
    """Cross-cutting settings: schema version and logging."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{value}'")
        return upper


class EngineConfig(BaseModel):
    """
    What to discover and how to run it.

    Selectors use the same syntax as the CLI: ``pkg.module:ClassName`` for
    one day, a dotted package name to scan everything beneath it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(description="Schema version")
    selectors: list[str] = Field(
        default_factory=lambda: ["advent.nineteen"],
        description="Days or packages to discover when none are given on the command line",
    )
    input_root: str = Field(
        default=".",
        description="Directory the production input pattern is resolved against",
    )
    input_pattern: str = Field(
        default=DEFAULT_INPUT_PATTERN,
        description="Path of a day's input relative to input_root; must contain {number}",
    )
    max_workers: Optional[int] = Field(
        default=None,
        ge=1,
        le=64,
        description="Days run in parallel on this many threads (None = executor default)",
    )

    @field_validator("input_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        if "{number}" not in value:
            raise ValueError("input_pattern must contain '{number}'")
        return value


class ReportConfig(BaseModel):
    """Where run reports are written."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(description="Schema version")
    output_directory: str = Field(
        default="reports",
        description="Run reports land in <output_directory>/<run_id>/",
    )


class AdventConfig(BaseModel):
    """
    Top-level config container.

    Only ``global`` is required. Commands fall back to defaults for any
    section that isn't present.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    engine: Optional[EngineConfig] = Field(default=None)
    report: Optional[ReportConfig] = Field(default=None)
