"""Exceptions raised by planning and transports."""


class TagVaultError(Exception):
    """Base class for tagvault errors."""


class CapacityError(TagVaultError):
    """Mandatory records do not fit the tag even with every optional record dropped."""

    def __init__(self, mandatory_size: int, budget: int) -> None:
        self.mandatory_size = mandatory_size
        self.budget = budget
        super().__init__(
            f"Essential data ({mandatory_size} bytes) exceeds tag capacity ({budget} bytes)"
        )

    @property
    def shortfall(self) -> int:
        """Bytes the mandatory records must shrink by to fit."""
        return self.mandatory_size - self.budget


class TransportError(TagVaultError):
    """Reader unavailable, tag removed mid-operation, or unsupported hardware."""
