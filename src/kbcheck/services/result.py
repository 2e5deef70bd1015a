"""ServiceResult and ServiceError — what every service operation returns.

A failed check is still an ``ok`` result: only an aborted run (missing
input) produces ``ok=False``. The CLI maps ``ok`` to the exit status.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation was aborted."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of a service operation.

    Attributes:
        ok: False only when the operation could not run to completion.
        op: Operation name, used to pick a renderer (e.g. ``"checklist"``).
        data: Operation payload.
        warnings: Non-fatal notes for the operator.
        error: Set when ``ok`` is False.
        meta: Free-form extras (log file location, timings).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
