"""Execution request/response models: the RPC contract for running a template."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExecutionOutcome(enum.Enum):
    OPENED = 'opened'
    REJECTED_TOO_LONG = 'hard-limit-exceeded'
    REJECTED_NOT_FOUND = 'not-found'
    REJECTED_UNEXPECTED = 'unexpected-error'


class RuntimeOverrides(BaseModel):
    """Per-call values that win over the stored template fields."""

    model_config = _WIRE_CONFIG

    hints_search: StrictBool | None = None
    temporary_chat: StrictBool | None = None
    model: StrictStr | None = None


class ExecuteTemplateOverrides(BaseModel):
    model_config = _WIRE_CONFIG

    runtime: RuntimeOverrides | None = None
    template_url: StrictStr | None = None
    query_template: StrictStr | None = None


class InlineTemplate(BaseModel):
    """An unsaved url/query/model bundle sent by the manual prompt surface."""

    model_config = _WIRE_CONFIG

    url: StrictStr | None = None
    query_template: StrictStr | None = None
    hints_search: StrictBool | None = None
    temporary_chat: StrictBool | None = None
    model: StrictStr | None = None
    custom_model: StrictStr | None = None


class ExecuteTemplateMessage(BaseModel):
    model_config = _WIRE_CONFIG

    type: Literal['execute-template'] = 'execute-template'
    template_id: str = ''
    text: str = ''
    overrides: ExecuteTemplateOverrides | None = None
    inline_template: InlineTemplate | None = None


class ExecuteTemplateResponse(BaseModel):
    success: bool
    reason: str | None = None

    @classmethod
    def from_outcome(cls, outcome: ExecutionOutcome) -> ExecuteTemplateResponse:
        if outcome is ExecutionOutcome.OPENED:
            return cls(success=True)
        return cls(success=False, reason=outcome.value)


@dataclass(frozen=True)
class RuntimeOptions:
    """Effective flags appended to the destination URL."""

    hints_search: bool = False
    temporary_chat: bool = False
    model: str | None = None


@dataclass(frozen=True)
class BuiltUrl:
    url: str
    query: str
    encoded_query: str
