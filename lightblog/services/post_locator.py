import datetime
import logging
import re
from pathlib import Path
from typing import List, Optional

from lightblog.schemas.blog import PostIdentity

logger = logging.getLogger(__name__)

POST_SUFFIX = ".md"
DATE_FORMAT = "%d%m%Y"
DATE_TOKEN = re.compile(r"^\d{8}$")


def parse_post_identity(file_path: Path) -> Optional[PostIdentity]:
    """
    Parse a `<slug>_<ddMMyyyy>.md` filename into a PostIdentity.

    Returns None for anything that does not follow the pattern.
    """
    name = file_path.name
    if not name.endswith(POST_SUFFIX):
        return None

    stem = name.removesuffix(POST_SUFFIX)
    slug, sep, date_part = stem.rpartition("_")
    if not sep or not DATE_TOKEN.match(date_part):
        return None

    try:
        published_at = datetime.datetime.strptime(date_part, DATE_FORMAT).date()
    except ValueError:
        return None

    return PostIdentity(filePath=file_path, slug=slug, publishedAt=published_at)


def locate_posts(posts_directory: Path) -> List[PostIdentity]:
    """Scan the top level of the posts directory for well-named post files."""
    if not posts_directory.is_dir():
        logger.warning(f"Posts directory not found: {posts_directory}")
        return []

    posts = []
    for path in sorted(posts_directory.glob(f"*{POST_SUFFIX}")):
        if not path.is_file():
            continue
        identity = parse_post_identity(path)
        if identity is None:
            logger.debug(f"Skipping {path.name}: not a <slug>_<ddMMyyyy>.md file")
            continue
        posts.append(identity)

    logger.info(f"Indexed {len(posts)} posts from {posts_directory}")
    return posts
