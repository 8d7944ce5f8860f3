"""Write plan and write result."""
from dataclasses import dataclass
from typing import Tuple

from tagvault.models.capacity import TagTypeId
from tagvault.models.record import Record


@dataclass(frozen=True)
class WritePlan:
    """Records that will be written (included) and those dropped to fit (excluded)."""
    included: Tuple[Record, ...]
    excluded: Tuple[Record, ...]
    total_encoded_size: int

    @property
    def truncated(self) -> bool:
        return bool(self.excluded)


@dataclass(frozen=True)
class WriteResult:
    """Successful write: the plan that landed on the tag."""
    plan: WritePlan
    tag_type: TagTypeId
    effective_budget: int

    @property
    def excluded(self) -> Tuple[Record, ...]:
        return self.plan.excluded
