import enum


class SaveState(str, enum.Enum):
    """
    Where the reconciler's save pipeline currently is.

    idle -> pending (timer armed) -> writing -> idle
    Re-arming keeps it pending; a write always ends idle, whatever the
    store answered.
    """

    IDLE = "idle"
    PENDING = "pending"
    WRITING = "writing"


class SaveStatus(str, enum.Enum):
    """Outcome of a single ``save`` call."""

    SKIPPED_EMPTY = "skipped_empty"
    SKIPPED_DEFAULT = "skipped_default"
    SCHEDULED = "scheduled"
    SAVED = "saved"
    FAILED = "failed"
    # A debounced write dropped because a newer save was accepted meanwhile
    SUPERSEDED = "superseded"

    @property
    def skipped(self) -> bool:
        return self in (SaveStatus.SKIPPED_EMPTY, SaveStatus.SKIPPED_DEFAULT)
