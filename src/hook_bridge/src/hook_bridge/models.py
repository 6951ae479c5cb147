"""Pydantic schemas for host ↔ bridge communication."""

from __future__ import annotations

from pydantic import BaseModel, Field

from services_api import TriggerEvent


class HookRequest(BaseModel):
    """A hook invocation delivered by the host."""

    event: TriggerEvent


class HookReply(BaseModel):
    """Outcome of a hook invocation returned to the host."""

    hook: str
    handled: int
    failed: int = 0
    may_proceed: bool = True


class CommandRequest(BaseModel):
    """A services command issued by an already authorized user."""

    source: str
    params: list[str] = Field(default_factory=list)


class CommandReply(BaseModel):
    """Command result returned to the host for display."""

    type: str
    code: str
    message: str


class AccountInfoReply(BaseModel):
    """Extra INFO lines for an account."""

    account: str
    lines: list[str]
