"""
Connection outcome - tagged result of a handshake attempt
"""

from dataclasses import dataclass
from enum import Enum


class OutcomeState(Enum):
    """The three states a handshake attempt can be in"""
    SUCCESS = "success"
    FAILED = "failed"
    CONNECTING = "connecting"


@dataclass(frozen=True)
class ConnectionOutcome:
    """Result of SAMPConnection.connect.

    Exactly one of three variants, selected by ``state``. Only FAILED
    carries a reason. CONNECTING is never returned by connect(); it is
    only observed through SAMPConnection.outcome while a call runs.

    Usage:
        outcome = conn.connect("player", "secret")
        if outcome.is_success:
            ...
        elif outcome.is_failed:
            print(outcome.reason)
    """
    state: OutcomeState
    reason: str = ""

    def __post_init__(self):
        if self.state is not OutcomeState.FAILED and self.reason:
            raise ValueError(f"{self.state.name} outcome cannot carry a reason")
        if self.state is OutcomeState.FAILED and not self.reason:
            raise ValueError("FAILED outcome needs a reason")

    @classmethod
    def success(cls) -> 'ConnectionOutcome':
        return cls(OutcomeState.SUCCESS)

    @classmethod
    def failed(cls, reason: str) -> 'ConnectionOutcome':
        return cls(OutcomeState.FAILED, reason)

    @classmethod
    def connecting(cls) -> 'ConnectionOutcome':
        return cls(OutcomeState.CONNECTING)

    @property
    def is_success(self) -> bool:
        return self.state is OutcomeState.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.state is OutcomeState.FAILED

    @property
    def is_connecting(self) -> bool:
        return self.state is OutcomeState.CONNECTING

    def __str__(self) -> str:
        if self.is_failed:
            return f"failed: {self.reason}"
        return self.state.value
