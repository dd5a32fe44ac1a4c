from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportResult:
    """Outcome of one import batch.

    Row-level problems never abort the batch; they are collected in `errors`.
    """

    succeeded: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def fail(self, message: str) -> None:
        self.failed += 1
        self.errors.append(message)

    @property
    def message(self) -> str:
        return f"{self.succeeded} succeeded, {self.failed} failed"
