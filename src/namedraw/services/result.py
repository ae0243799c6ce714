"""Results returned by every DrawMachine operation.

A result is one of three shapes:

- succeeded: the operation ran; ``data`` holds the session snapshot
  plus operation-specific keys (``winner``, ``removed``, ...).
- blocked: the operation was ignored because a precondition failed
  (drawing in progress, empty roster, exhausted pool, empty history).
  Still ``ok``; ``data["reason"]`` names the :class:`BlockedReason`.
- failed: the operation was rejected; ``error`` carries an
  :class:`ErrorCode` and a human message.

The CLI renders these for humans, ``--quiet`` or ``--json``; plugins
never see them (they receive plain snapshot dicts).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"
    DRAW_CANCELLED = "DRAW_CANCELLED"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one draw-machine operation.

    Attributes:
        ok: False only for failed operations; blocked no-ops are ``ok``.
        op: Operation name (``"draw"``, ``"undo"``, ``"reset_all"``, ...).
        data: Session snapshot plus operation-specific keys.
        warnings: Blocked-operation messages, persistence failures and
            plugin errors, in the order they happened.
        error: Set when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def succeeded(
        cls, op: str, data: dict[str, Any], warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def blocked_by(
        cls, op: str, reason: str, snapshot: dict[str, Any], warnings: list[str]
    ) -> ServiceResult:
        """A no-op result: *snapshot* is returned unchanged and tagged with *reason*."""
        data = {**snapshot, "blocked": True, "reason": str(reason)}
        return cls(ok=True, op=op, data=data, warnings=warnings)

    @classmethod
    def failed(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        *,
        data: dict[str, Any] | None = None,
        detail: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            data=data or {},
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )

    @property
    def blocked(self) -> bool:
        return bool(self.data.get("blocked"))

    @property
    def reason(self) -> str | None:
        """The blocked reason, or None for results that ran or failed."""
        return self.data.get("reason") if self.blocked else None

    @property
    def winner(self) -> str | None:
        """The committed winner of a completed draw."""
        return self.data.get("winner")
