"""Fit a record set into a byte budget: keep mandatory records, pack optional ones in order."""
import logging
from typing import List, Sequence

from tagvault.config import MANDATORY_RECORD_COUNT
from tagvault.core.errors import CapacityError
from tagvault.core.size_estimator import size_of, size_of_records
from tagvault.models.plan import WritePlan
from tagvault.models.record import Record

logger = logging.getLogger(__name__)


def plan(records: Sequence[Record], budget: int) -> WritePlan:
    """Build a WritePlan that fits budget.

    The first MANDATORY_RECORD_COUNT records (service URL, metadata, owner) are
    all-or-nothing: if they alone exceed the budget, CapacityError is raised.
    Remaining records are optional and scanned once in the given order; each is
    included if it still fits, otherwise excluded, and the scan continues so a
    later smaller record can still be packed. Order is priority, so records are
    never reordered to pack more.
    """
    budget = max(0, budget)
    mandatory = list(records[:MANDATORY_RECORD_COUNT])
    optional = records[MANDATORY_RECORD_COUNT:]

    mandatory_size = size_of_records(mandatory)
    if mandatory_size > budget:
        raise CapacityError(mandatory_size, budget)

    remaining = budget - mandatory_size
    included: List[Record] = []
    excluded: List[Record] = []
    for record in optional:
        needed = size_of(record)
        if needed <= remaining:
            included.append(record)
            remaining -= needed
        else:
            logger.warning(
                "Cannot fit record on tag, remaining space: %d bytes, needed: %d bytes",
                remaining,
                needed,
            )
            excluded.append(record)

    if optional:
        logger.info("Writing %d of %d optional records", len(included), len(optional))
    return WritePlan(
        included=tuple(mandatory + included),
        excluded=tuple(excluded),
        total_encoded_size=budget - remaining,
    )
