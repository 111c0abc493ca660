from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _slugify(value: str) -> str:
    text = value.strip().lower()
    out = []
    prev_dash = False
    for ch in text:
        if ch.isalnum():
            out.append(ch)
            prev_dash = False
        else:
            if not prev_dash:
                out.append("-")
            prev_dash = True
    slug = "".join(out).strip("-")
    return slug[:200]


class BlogPostContent(BaseModel):
    """Blog content generated from a video transcript."""

    content: str
    summary: str = ""
    tags: list[str] = Field(default_factory=list)


class BlogPostDraft(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    title: str = Field(..., min_length=1)
    slug: Optional[str] = Field(None, validate_default=True)
    content: str = ""
    excerpt: Optional[str] = None
    featured_image: Optional[str] = Field(None, alias="featuredImage")
    category_id: Optional[int] = Field(None, alias="categoryId")
    status: str = "published"
    tags: Optional[list[str]] = None

    @field_validator("slug", mode="before")
    @classmethod
    def _ensure_slug(cls, v: Optional[str], info):  # type: ignore[override]
        if v is not None and v.strip():
            return v
        title = info.data.get("title")
        if isinstance(title, str) and title.strip():
            return _slugify(title)
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _dedup_tags(cls, v: Optional[list[str]]):
        if not v:
            return v
        seen = set()
        deduped = []
        for item in v:
            key = item.strip().lower()
            if key and key not in seen:
                seen.add(key)
                deduped.append(item.strip())
        return deduped

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
