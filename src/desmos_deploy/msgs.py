"""
Wire messages and query results of the posts filter contract.

Outgoing messages validate locally and serialize with ``to_wire()`` into the
snake_case JSON the contract expects. Query results are read-only
projections of chain state; unknown keys are ignored.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import MessageValidationError

# the contract stores the limit as u16
ReportsLimit = Annotated[int, Field(ge=0, le=65535, strict=True)]

M = TypeVar("M", bound=BaseModel)


def _format_errors(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def parse_message(model: Type[M], data: Any) -> M:
    """Validate ``data`` into ``model``, raising MessageValidationError on mismatch."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MessageValidationError(f"Invalid {model.__name__}: {_format_errors(e)}") from e


class _WireMsg(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump()


class _TaggedMsg(_WireMsg):
    tag: ClassVar[str]

    def to_wire(self) -> Dict[str, Any]:
        return {self.tag: self.model_dump()}


class InitMsg(_WireMsg):
    reports_limit: ReportsLimit


class GetFilteredPosts(_TaggedMsg):
    tag: ClassVar[str] = "get_filtered_posts"

    reports_limit: ReportsLimit


class EditReportsLimit(_TaggedMsg):
    tag: ClassVar[str] = "edit_reports_limit"

    reports_limit: ReportsLimit


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class OptionalData(_Record):
    key: str
    value: str


class Attachment(_Record):
    uri: str
    mime_type: str
    tags: List[str] = Field(default_factory=list)


class PollAnswer(_Record):
    id: str
    text: str


class PollData(_Record):
    question: str
    provided_answers: List[PollAnswer] = Field(default_factory=list)
    end_date: str
    allows_multiple_answers: bool
    allows_answer_edits: bool


class Post(_Record):
    post_id: str
    parent_id: Optional[str] = None
    message: str
    created: str
    last_edited: Optional[str] = None
    allows_comments: bool = True
    subspace: str
    optional_data: List[OptionalData] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
    poll_data: List[PollData] = Field(default_factory=list)
    creator: str

    @field_validator("optional_data", "attachments", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("poll_data", mode="before")
    @classmethod
    def _poll_data_as_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, Mapping):
            return [v]
        return v


class PostQueryResponse(_Record):
    posts: List[Post] = Field(default_factory=list)
