from functools import lru_cache

from fastapi import Depends

from lightblog.repos.posts_repo import FilePostsRepo
from lightblog.services.post_cache import PostCache
from lightblog.services.rss_feed import RssFeedService
from lightblog.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


@lru_cache(maxsize=1)
def get_posts_repo() -> FilePostsRepo:
    # One repo per process: the post index is built once and reused.
    cache = PostCache(sliding_expiration=settings.cache_sliding_expiration)
    return FilePostsRepo(settings.WEB_ROOT, cache)


def get_rss_feed_service(
    repo=Depends(get_posts_repo),
    current_settings: Settings = Depends(get_settings),
):
    return RssFeedService(
        repo=repo,
        site=current_settings.site_options,
        force_https=not current_settings.is_development,
    )
