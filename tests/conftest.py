import datetime
import math
from pathlib import Path

import pytest

from lightblog.schemas.blog import PagedPosts, RenderedPost


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCache:
    """
    Dict-backed cache stand-in.
    Set fail=True to make every call raise, like an unavailable store.
    """

    def __init__(self, fail: bool = False):
        self.entries = {}
        self.fail = fail
        self.calls = []

    def get(self, key):
        self.calls.append(("get", key))
        if self.fail:
            raise RuntimeError("cache down")
        return self.entries.get(key)

    def set(self, key, value):
        self.calls.append(("set", key))
        if self.fail:
            raise RuntimeError("cache down")
        self.entries[key] = value


class CountingRenderer:
    """Wraps a renderer and records the markdown it was asked to render."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    def __call__(self, text: str):
        self.calls.append(text)
        return self.inner(text)


def make_post(slug: str, date: datetime.date, title: str | None = None) -> RenderedPost:
    return RenderedPost(
        slug=slug,
        title=title if title is not None else slug.replace("-", " ").title(),
        bodyHtml=f"<p>Body of {slug}</p>",
        summaryHtml=f"<p>Summary of {slug}",
        publishedAt=date,
        year=date.year,
        month=date.month,
    )


class FakePostsRepo:
    """
    Minimal repo stand-in for router and feed tests.
    Posts are returned from get_all in the order given.
    """

    def __init__(self, posts=None):
        self.posts = list(posts or [])
        self.calls = []

    def _newest_first(self):
        return sorted(self.posts, key=lambda p: p.publishedAt, reverse=True)

    def get_paged(self, page: int, page_size: int) -> PagedPosts:
        self.calls.append(("get_paged", page, page_size))
        start = (page - 1) * page_size
        items = self._newest_first()[start : start + page_size] if page >= 1 else []
        return PagedPosts(
            items=items,
            pageNumber=page,
            totalPages=math.ceil(len(self.posts) / page_size),
        )

    def get_all(self):
        self.calls.append(("get_all",))
        return list(self.posts)

    def find_post(self, year: int, month: int, name: str):
        self.calls.append(("find_post", year, month, name))
        return next(
            (
                p
                for p in self.posts
                if p.year == year and p.month == month and name.lower() in p.slug.lower()
            ),
            None,
        )

    def get_top_posts(self, count: int):
        self.calls.append(("get_top_posts", count))
        return self._newest_first()[: max(count, 0)]


@pytest.fixture
def web_root(tmp_path: Path) -> Path:
    (tmp_path / "posts").mkdir()
    return tmp_path


@pytest.fixture
def write_post(web_root: Path):
    """Write a post file under <web_root>/posts and return its path."""

    def _write(filename: str, content: str = "# Title\n\nBody text.") -> Path:
        path = web_root / "posts" / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _write
