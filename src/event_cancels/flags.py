from enum import Enum
from typing import Optional


class CancelFlag(Enum):
    """Requested value of an ``IsCancelled`` field.

    ``UNSET`` means no change was requested for the record.
    """

    UNSET = None
    CANCELLED = True
    REVERSED = False

    @classmethod
    def from_wire(cls, value) -> "CancelFlag":
        if isinstance(value, CancelFlag):
            return value
        if value is None:
            return cls.UNSET
        if isinstance(value, bool):
            return cls.CANCELLED if value else cls.REVERSED
        raise ValueError(f"IsCancelled must be a boolean or null, got {value!r}")

    def to_wire(self) -> Optional[bool]:
        return self.value

    @property
    def is_set(self) -> bool:
        return self is not CancelFlag.UNSET
