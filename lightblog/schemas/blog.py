import datetime
from pathlib import Path
from typing import List, NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class PostIdentity(BaseModel):
    """Filename metadata for a post on disk, before any rendering."""

    model_config = ConfigDict(frozen=True)

    filePath: Path
    slug: str
    publishedAt: datetime.date


class RenderedMarkdown(NamedTuple):
    title: str
    bodyHtml: str
    summaryHtml: str


class RenderedPost(BaseModel):
    slug: str
    title: str = ""
    bodyHtml: str = ""
    summaryHtml: str = ""
    publishedAt: datetime.date
    year: int
    month: int


class PagedPosts(BaseModel):
    items: List[RenderedPost] = Field(default_factory=list)
    pageNumber: int
    totalPages: int


class SiteOptions(BaseModel):
    name: str = "My Site"
    description: str = ""
    authorName: str = "Author"
    summaryOnly: bool = False
