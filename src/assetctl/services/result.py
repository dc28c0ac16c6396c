"""ServiceResult and ServiceError — the universal task contract.

INVARIANT: All service-layer methods return ServiceResult.
The CLI and the watch loop both consume this type: the CLI turns a failure
into exit status 1, the watch loop logs it and keeps running.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all build tasks.

    Attributes:
        ok: Whether the task succeeded.
        op: Name of the task (e.g. ``"css"``).
        data: Task-specific payload (written files, counts, sub-results).
        warnings: Non-fatal issues encountered during the task.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
