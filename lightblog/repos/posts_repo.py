import logging
import math
import threading
from pathlib import Path
from typing import Callable, List, Optional

from lightblog.schemas.blog import PagedPosts, PostIdentity, RenderedMarkdown, RenderedPost
from lightblog.services.markdown_renderer import render_markdown
from lightblog.services.post_locator import locate_posts

logger = logging.getLogger(__name__)


class PostRenderError(Exception):
    """A post file could not be read or converted."""

    def __init__(self, slug: str, file_path: Path):
        super().__init__(f"Failed to render post {slug} from {file_path}")
        self.slug = slug
        self.file_path = file_path


class FilePostsRepo:
    """
    Read-only post index over `<web_root>/posts`.

    The directory is scanned once, on the first query, and never again for
    the lifetime of the repo. Rendered posts go through the cache.
    """

    def __init__(
        self,
        web_root: str | Path,
        cache,
        renderer: Callable[[str], RenderedMarkdown] = render_markdown,
    ):
        self.posts_directory = Path(web_root) / "posts"
        self.cache = cache
        self.renderer = renderer
        self._index: Optional[List[PostIdentity]] = None
        self._index_lock = threading.Lock()

    def get_paged(self, page: int, page_size: int) -> PagedPosts:
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")

        logger.info(f"Getting posts for page {page}")
        index = self._get_index()
        total_pages = math.ceil(len(index) / page_size)

        selected: List[PostIdentity] = []
        if page >= 1:
            start = (page - 1) * page_size
            selected = self._newest_first(index)[start : start + page_size]

        return PagedPosts(
            items=self._render_many(selected),
            pageNumber=page,
            totalPages=total_pages,
        )

    def get_all(self) -> List[RenderedPost]:
        """Every post, in index build order (not sorted by date)."""
        return self._render_many(self._get_index())

    def find_post(self, year: int, month: int, name: str) -> Optional[RenderedPost]:
        """
        First post from the given month whose slug contains `name`, ignoring case.

        Candidates are checked in index build order, so when several posts in
        a month match, the earliest filename wins.
        """
        needle = name.casefold()
        match = next(
            (
                identity
                for identity in self._get_index()
                if identity.publishedAt.year == year
                and identity.publishedAt.month == month
                and needle in identity.slug.casefold()
            ),
            None,
        )
        if match is None:
            return None
        return self._render(match)

    def get_top_posts(self, count: int) -> List[RenderedPost]:
        if count <= 0:
            return []
        return self._render_many(self._newest_first(self._get_index())[:count])

    def _get_index(self) -> List[PostIdentity]:
        if self._index is None:
            with self._index_lock:
                if self._index is None:
                    self._index = locate_posts(self.posts_directory)
        return self._index

    @staticmethod
    def _newest_first(index: List[PostIdentity]) -> List[PostIdentity]:
        return sorted(index, key=lambda identity: identity.publishedAt, reverse=True)

    def _render_many(self, identities: List[PostIdentity]) -> List[RenderedPost]:
        posts = []
        for identity in identities:
            try:
                posts.append(self._render(identity))
            except PostRenderError as e:
                logger.error(f"{e}: {e.__cause__}")
        return posts

    def _render(self, identity: PostIdentity) -> RenderedPost:
        key = identity.filePath.name
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        try:
            text = identity.filePath.read_text(encoding="utf-8")
            rendered = self.renderer(text)
        except Exception as e:
            raise PostRenderError(identity.slug, identity.filePath) from e

        post = RenderedPost(
            slug=identity.slug,
            title=rendered.title,
            bodyHtml=rendered.bodyHtml,
            summaryHtml=rendered.summaryHtml,
            publishedAt=identity.publishedAt,
            year=identity.publishedAt.year,
            month=identity.publishedAt.month,
        )
        self._cache_set(key, post)
        return post

    def _cache_get(self, key: str) -> Optional[RenderedPost]:
        try:
            return self.cache.get(key)
        except Exception as e:
            logger.warning(f"Cache lookup failed for {key}: {e}")
            return None

    def _cache_set(self, key: str, post: RenderedPost) -> None:
        try:
            self.cache.set(key, post)
        except Exception as e:
            logger.warning(f"Cache store failed for {key}: {e}")
