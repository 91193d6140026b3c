from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of one tool invocation: a single text payload, maybe flagged as an error."""

    text: str
    is_error: bool = False

    @property
    def succeeded(self) -> bool:
        return not self.is_error

    @classmethod
    def ok(cls, text: str) -> "ExecutionOutcome":
        return cls(text=text, is_error=False)

    @classmethod
    def error(cls, text: str) -> "ExecutionOutcome":
        return cls(text=text, is_error=True)
