"""Run outcome schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field


class EntityOutcome(BaseModel):
    """Outcome of one entity task within a run."""

    entity: str
    new_records: int = 0
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        """Whether the task for this entity failed."""
        return self.error is not None


class RunResult(BaseModel):
    """Aggregate result of a coordinator run."""

    context: str
    attempted: int = 0
    skipped: int = 0
    succeeded: int = 0
    failed: int = 0
    new_records: int = 0
    outcomes: List[EntityOutcome] = Field(default_factory=list)

    def record(self, outcome: EntityOutcome) -> None:
        """Fold one entity outcome into the totals."""
        self.outcomes.append(outcome)
        if outcome.failed:
            self.failed += 1
        else:
            self.succeeded += 1
            self.new_records += outcome.new_records
