import datetime
import html
import logging
from email.utils import format_datetime
from typing import Callable, Optional

from lightblog.schemas.blog import RenderedPost, SiteOptions

logger = logging.getLogger(__name__)

HomeLink = Callable[[], Optional[str]]
PostLink = Callable[[RenderedPost], Optional[str]]


def rfc822_date(value: datetime.date) -> str:
    midnight = datetime.datetime.combine(value, datetime.time(), datetime.timezone.utc)
    return format_datetime(midnight)


def to_https(url: str) -> str:
    if url.startswith("http://"):
        return "https://" + url[len("http://") :]
    return url


class RssFeedService:
    def __init__(self, repo, site: SiteOptions, force_https: bool = True):
        self.repo = repo
        self.site = site
        self.force_https = force_https

    def get_feed(self, home_link: HomeLink, post_link: PostLink) -> str:
        """
        Build an RSS 2.0 document of every post, newest first.

        Returns "" when the site link can't be resolved. Posts without a
        resolvable link are left out of the feed.
        """
        link = home_link()
        if link is None:
            logger.warning("No site link available, returning empty feed")
            return ""
        link = self._normalize(link)

        posts = sorted(self.repo.get_all(), key=lambda p: p.publishedAt, reverse=True)

        items = []
        for post in posts:
            url = post_link(post)
            if url is None:
                continue
            items.append(self._item(post, self._normalize(url)))

        logger.info(f"Found {len(items)} posts")

        return "\n".join(
            [
                '<?xml version="1.0" encoding="UTF-8"?>',
                '<rss version="2.0">',
                "<channel>",
                f"<title>{html.escape(self.site.name)}</title>",
                f"<link>{html.escape(link)}</link>",
                f"<description>{html.escape(self.site.description)}</description>",
                *items,
                "</channel>",
                "</rss>",
            ]
        )

    def _item(self, post: RenderedPost, url: str) -> str:
        body = post.summaryHtml if self.site.summaryOnly else post.bodyHtml
        url = html.escape(url)
        return "\n".join(
            [
                "<item>",
                f"<title>{html.escape(post.title)}</title>",
                f"<link>{url}</link>",
                f'<guid isPermaLink="true">{url}</guid>',
                f"<pubDate>{rfc822_date(post.publishedAt)}</pubDate>",
                f"<author>{html.escape(self.site.authorName)}</author>",
                f"<description>{html.escape(body)}</description>",
                "</item>",
            ]
        )

    def _normalize(self, url: str) -> str:
        return to_https(url) if self.force_https else url
