from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import FailureKind

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
WRITE_METHODS = frozenset({"POST", "PUT"})


class RequestSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint: str
    method: HttpMethod
    data: Optional[Any] = None

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @property
    def sends_body(self) -> bool:
        return self.method in WRITE_METHODS and self.data is not None


class RequestOutcome(BaseModel):
    """
    Result of one dispatched request: either ok with the decoded body, or a
    failure with a message and whatever upstream detail was available.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    data: Optional[Any] = None
    kind: Optional[FailureKind] = None
    message: Optional[str] = None
    status: Optional[int] = None
    body: Optional[Any] = None

    @classmethod
    def success(cls, data: Any) -> "RequestOutcome":
        return cls(ok=True, data=data)

    @classmethod
    def failure(
        cls,
        kind: FailureKind,
        message: str,
        status: Optional[int] = None,
        body: Optional[Any] = None,
    ) -> "RequestOutcome":
        return cls(ok=False, kind=kind, message=message, status=status, body=body)


class GhostApiResponse(BaseModel):
    success: Literal[True] = True
    data: Optional[Any] = None


class GhostErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
    details: str


def envelope_from_outcome(outcome: RequestOutcome, method: str) -> Dict[str, Any]:
    """Convert a dispatcher outcome into the tool response envelope."""
    if outcome.ok:
        return GhostApiResponse(data=outcome.data).model_dump()
    return GhostErrorResponse(
        error=f"Failed to execute Ghost {method.upper()} request",
        details=outcome.message or "Unknown error",
    ).model_dump()
