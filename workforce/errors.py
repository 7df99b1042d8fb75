"""
Error taxonomy shared by the engine.

Errors are returned inside result models, never raised to callers.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Kinds of recoverable engine errors."""
    VALIDATION = "validation"
    IDENTITY_CONFLICT = "identity_conflict"  # self-reassignment, unknown person, duplicate member
    OWNERSHIP_MISMATCH = "ownership_mismatch"  # stale data, caller should refresh
    INVALID_STATE = "invalid_state"  # record is not in a state that allows the action


class EngineError(BaseModel):
    """A recoverable error surfaced to the operator."""
    kind: ErrorKind
    message: str
    entity_id: Optional[str] = None


def identity_conflict(message: str, entity_id: Optional[str] = None) -> EngineError:
    return EngineError(kind=ErrorKind.IDENTITY_CONFLICT, message=message, entity_id=entity_id)


def ownership_mismatch(message: str, entity_id: Optional[str] = None) -> EngineError:
    return EngineError(kind=ErrorKind.OWNERSHIP_MISMATCH, message=message, entity_id=entity_id)


def validation_error(message: str, entity_id: Optional[str] = None) -> EngineError:
    return EngineError(kind=ErrorKind.VALIDATION, message=message, entity_id=entity_id)


def invalid_state(message: str, entity_id: Optional[str] = None) -> EngineError:
    return EngineError(kind=ErrorKind.INVALID_STATE, message=message, entity_id=entity_id)
