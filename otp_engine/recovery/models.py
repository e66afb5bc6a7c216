"""
Recovery Code Models
====================
Lifecycle state and storage record for account-recovery codes.
"""

from datetime import datetime, timezone
from typing import Optional
from dataclasses import dataclass, field
from enum import Enum


class RecoveryCodeState(str, Enum):
    """Recovery code lifecycle states."""
    GENERATED = "generated"
    HASHED = "hashed"
    CONSUMED = "consumed"
    EXPIRED = "expired"


@dataclass
class RecoveryCodeRecord:
    """
    What the caller stores for one recovery code.

    The plain code is never part of the record. CONSUMED and EXPIRED are
    set by the caller's storage layer.
    """
    code_hash: str
    state: RecoveryCodeState = RecoveryCodeState.HASHED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    consumed_at: Optional[datetime] = None

    @property
    def is_usable(self) -> bool:
        return self.state == RecoveryCodeState.HASHED

    def mark_consumed(self) -> None:
        if not self.is_usable:
            raise ValueError(f"Recovery code cannot be consumed from state {self.state.value}")
        self.state = RecoveryCodeState.CONSUMED
        self.consumed_at = datetime.now(timezone.utc)

    def mark_expired(self) -> None:
        if not self.is_usable:
            raise ValueError(f"Recovery code cannot expire from state {self.state.value}")
        self.state = RecoveryCodeState.EXPIRED
