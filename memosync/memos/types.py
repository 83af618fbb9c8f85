"""Memos API types (Pydantic models with camelCase JSON aliases)."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class MemoResource(BaseModel):
    """A binary attachment owned by a memo."""

    name: str
    uid: str = ""
    filename: str
    type: str = ""
    size: int | str | None = None
    create_time: datetime | None = Field(None, alias="createTime")

    model_config = {"populate_by_name": True}

    @property
    def short_id(self) -> str:
        """Last path segment of the opaque resource name."""
        return self.name.split("/")[-1] or self.name


class MemoItem(BaseModel):
    """A single memo record as returned by ``GET /api/v1/memos``."""

    name: str
    uid: str = ""
    content: str = ""
    visibility: str = "PRIVATE"
    create_time: datetime = Field(alias="createTime")
    update_time: datetime = Field(alias="updateTime")
    display_time: datetime | None = Field(None, alias="displayTime")
    creator: str = ""
    row_status: str = Field("", alias="rowStatus")
    pinned: bool = False
    resources: list[MemoResource] = []
    tags: list[str] = []

    model_config = {"populate_by_name": True}

    @field_validator("content", "visibility", mode="before")
    @classmethod
    def _none_as_default(cls, value, info):
        if value is None:
            return "" if info.field_name == "content" else "PRIVATE"
        return value

    @field_validator("resources", "tags", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class MemosPage(BaseModel):
    """One page of the memo list response."""

    memos: list[MemoItem]
    next_page_token: str | None = Field(None, alias="nextPageToken")

    model_config = {"populate_by_name": True}
