import logging
import re
from typing import List

import frontmatter
import markdown
import yaml

from lightblog.schemas.blog import RenderedMarkdown

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]

TITLE_PATTERN = re.compile(r"<h1(?:\s[^>]*)?>(.*?)</h1>", re.IGNORECASE | re.DOTALL)
TAG_PATTERN = re.compile(r"<[^>]+>")
PARAGRAPH_CLOSE = "</p>"
IMAGE_MARKER = "<img"

# Summary cut bounds, as paragraph indexes
MAX_IMAGE_CUT = 6
MIN_IMAGE_CUT = 3
MAX_TEXT_CUT = 7


def strip_front_matter(text: str) -> str:
    """
    Drop a leading YAML header, but only one that parses to a mapping.

    A post may simply open with a `---` rule, so anything else is left as
    markdown.
    """
    try:
        metadata, content = frontmatter.parse(text)
    except yaml.YAMLError as e:
        logger.debug(f"Leading --- block is not YAML, rendering as markdown: {e}")
        return text
    if not metadata:
        return text
    return content


def to_html(text: str) -> str:
    """Convert markdown (optionally led by a front matter block) to HTML."""
    body = strip_front_matter(text)
    return markdown.markdown(body, extensions=MARKDOWN_EXTENSIONS)


def extract_title(html: str) -> tuple[str, str]:
    """
    Pull the first <h1> out of the rendered HTML.

    Returns (title, html without that heading). Title is "" when there is none.
    """
    match = TITLE_PATTERN.search(html)
    if not match:
        return "", html

    title = TAG_PATTERN.sub("", match.group(1)).strip()
    body = html[: match.start()] + html[match.end() :]
    return title, body


def split_paragraphs(html: str) -> List[str]:
    return [chunk for chunk in html.split(PARAGRAPH_CLOSE) if chunk]


def summary_cut(paragraphs: List[str]) -> int:
    """Index of the last paragraph to keep in a summary."""
    image_index = next(
        (i for i, chunk in enumerate(paragraphs) if IMAGE_MARKER in chunk), None
    )
    if image_index is None:
        return min(MAX_TEXT_CUT, len(paragraphs) - 1)
    return max(min(image_index, MAX_IMAGE_CUT), MIN_IMAGE_CUT)


def build_summary(html: str) -> str:
    paragraphs = split_paragraphs(html)
    cut = summary_cut(paragraphs)
    return "".join(paragraphs[: cut + 1])


def render_markdown(text: str) -> RenderedMarkdown:
    html = to_html(text)
    title, body = extract_title(html)
    if not title:
        logger.debug("Rendered post has no <h1> title")
    return RenderedMarkdown(title=title, bodyHtml=body, summaryHtml=build_summary(body))
