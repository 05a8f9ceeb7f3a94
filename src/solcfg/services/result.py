"""ServiceResult and ServiceError: the service-layer contract.

INVARIANT: All CLI-facing service methods return ServiceResult.
A failed result never carries a partially resolved configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from solcfg.domain.errors import ResolutionError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: ResolutionError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=exc.detail)


class ServiceResult(BaseModel):
    """Return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"resolve"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(cls, op: str, exc: ResolutionError) -> ServiceResult:
        """Wrap a typed resolution failure."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
