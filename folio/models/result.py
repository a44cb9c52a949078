"""ActionResult data model."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class RejectionReason(str, Enum):
    """Why a requested mutation was refused."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INSUFFICIENT_HOLDINGS = "INSUFFICIENT_HOLDINGS"
    NOT_OWNED = "NOT_OWNED"


class ActionResult(BaseModel):
    """Represents the outcome of a portfolio command."""

    status: Literal["APPLIED", "REJECTED", "IGNORED"] = Field(..., description="Outcome")
    reason: Optional[RejectionReason] = Field(default=None, description="Rejection reason")
    message: str = Field(default="", description="Human-readable message")

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.status == "APPLIED"

    @classmethod
    def applied(cls, message: str = "") -> "ActionResult":
        return cls(status="APPLIED", message=message)

    @classmethod
    def rejected(cls, reason: RejectionReason, message: str) -> "ActionResult":
        return cls(status="REJECTED", reason=reason, message=message)

    @classmethod
    def ignored(cls) -> "ActionResult":
        return cls(status="IGNORED")
