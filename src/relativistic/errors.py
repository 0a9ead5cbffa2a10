"""
src/relativistic/errors.py - Fail-Fast Kinematics Errors

Typed errors for logically impossible requests (superluminal rendezvous,
out-of-domain velocities, events out of causal order).

Every error is raised through stoprule(), which emits an anomaly receipt
first. Errors carry the offending parameters for the caller to surface.

Receipt: anomaly
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional, Type

# Import from project root
import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from receipts import emit_receipt, StopRule


class ErrorKind(str, Enum):
    POSITION_INVALID = "position_invalid"
    SOURCE_FRAME_INCOMPATIBLE = "source_frame_incompatible"
    PHYSICS_PARAMETER_INVALID = "physics_parameter_invalid"
    CAUSALITY_VIOLATION = "causality_violation"
    DOMAIN_OUT_OF_RANGE = "domain_out_of_range"


class KinematicsError(StopRule, ValueError):
    """
    Base class for fail-fast kinematics errors.

    Attributes:
        kind: ErrorKind of the failure
        parameters: Offending inputs, keyed by name
    """

    kind: ErrorKind = ErrorKind.PHYSICS_PARAMETER_INVALID

    def __init__(self, message: str, parameters: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.parameters = dict(parameters or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, {self.parameters!r})"


class PositionError(KinematicsError):
    """A spacetime event has non-finite or negative-time coordinates."""
    kind = ErrorKind.POSITION_INVALID


class SourceFrameError(KinematicsError):
    """A target event is not reachable from its source frame."""
    kind = ErrorKind.SOURCE_FRAME_INCOMPATIBLE


class PhysicsParameterError(KinematicsError):
    """A scalar physics parameter is non-finite or out of range."""
    kind = ErrorKind.PHYSICS_PARAMETER_INVALID


class CausalityError(KinematicsError):
    """The request needs the target before the start or faster-than-light travel."""
    kind = ErrorKind.CAUSALITY_VIOLATION


class DomainError(KinematicsError):
    """A math function was called outside its domain (e.g. |v| >= 1)."""
    kind = ErrorKind.DOMAIN_OUT_OF_RANGE


def stoprule(
    error_cls: Type[KinematicsError],
    message: str,
    parameters: Optional[Dict[str, Any]] = None,
    tenant_id: str = "default",
) -> NoReturn:
    """
    Emit an anomaly receipt, then raise error_cls.

    Args:
        error_cls: KinematicsError subclass to raise
        message: Human-readable reason
        parameters: Offending inputs
        tenant_id: Tenant ID for receipt

    Raises:
        error_cls: Always
    """
    parameters = dict(parameters or {})
    emit_receipt("anomaly", {
        "tenant_id": tenant_id,
        "metric": error_cls.kind.value,
        "message": message,
        "parameters": parameters,
        "classification": "violation",
        "action": "halt",
    })
    raise error_cls(message, parameters)
