from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ImportedItem(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    title: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        # the backend returns numeric ids for posts and videos
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v):
        # WordPress REST titles arrive as {"rendered": "..."}
        if isinstance(v, dict):
            return v.get("rendered") or ""
        return v or ""


class ImportResult(BaseModel):
    """Response of a bulk-import endpoint."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    count: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0)
    message: Optional[str] = None
    imported_items: list[ImportedItem] = Field(default_factory=list, alias="importedItems")

    @model_validator(mode="before")
    @classmethod
    def _accept_imported_posts(cls, data):
        # The WordPress import route names the list ``importedPosts``
        if isinstance(data, dict) and "importedItems" not in data and "imported_items" not in data:
            posts = data.get("importedPosts")
            if posts is not None:
                data = {**data, "importedItems": posts}
        return data

    @field_validator("count", "skipped", mode="before")
    @classmethod
    def _none_is_zero(cls, v):
        return 0 if v is None else v

    @field_validator("imported_items", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return [] if v is None else v


class ImportJob(BaseModel):
    """Snapshot of a running bulk import, as rendered by the admin console.

    Snapshots are frozen.  :class:`src.importers.progress.ProgressTracker`
    produces a new one for every phase, so a consumer holding a reference
    never sees it change underneath it.
    """

    model_config = ConfigDict(frozen=True)

    is_importing: bool = False
    current_step: str = ""
    progress: float = Field(0, ge=0, le=100)
    total_count: int = Field(0, ge=0)
    imported_count: int = Field(0, ge=0)
    skipped_count: int = Field(0, ge=0)
    failed_enrichments: int = Field(0, ge=0)
    logs: tuple[str, ...] = ()
    can_close: bool = False
    close_deadline: Optional[float] = None
    failed: bool = False
