# Copyright (c) Syntropy Systems
"""Pydantic models for run and self-test reports."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from tuneup.modes import ExecutionMode


class TuneupBaseModel(BaseModel):
    """Base model with shared config for tuneup schemas."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )


class RunReport(TuneupBaseModel):
    """Summary of one optimizer run."""

    mode: ExecutionMode
    applied: int = 0
    simulated: int = 0
    failed: list[str] = Field(default_factory=list)
    artifacts: list[str] = Field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


class ProbeResult(TuneupBaseModel):
    """Outcome of one self-test probe."""

    name: str
    passed: bool
    detail: str = ""


class SuiteReport(TuneupBaseModel):
    """All probe results. The suite passes only if every probe does."""

    results: list[ProbeResult] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.results)

    @property
    def failures(self) -> list[ProbeResult]:
        return [result for result in self.results if not result.passed]
