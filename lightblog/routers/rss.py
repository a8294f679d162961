import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response
from starlette.routing import NoMatchFound

from lightblog import dependencies as deps
from lightblog.schemas.blog import RenderedPost
from lightblog.services.rss_feed import RssFeedService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/rss")
def rss_feed(
    request: Request,
    service: RssFeedService = Depends(deps.get_rss_feed_service),
):
    logger.info("Getting RSS feed.")

    def home_link() -> Optional[str]:
        return _url_for(request, "home")

    def post_link(post: RenderedPost) -> Optional[str]:
        return _url_for(
            request, "post", year=post.year, month=post.month, name=post.slug
        )

    try:
        feed = service.get_feed(home_link, post_link)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error building RSS feed: {e}")
        raise HTTPException(status_code=500, detail="Failed to build feed")

    return Response(content=feed, media_type="text/xml; charset=utf-8")


def _url_for(request: Request, route_name: str, **path_params) -> Optional[str]:
    try:
        return str(request.url_for(route_name, **path_params))
    except NoMatchFound:
        logger.warning(f"No route named {route_name} for {path_params}")
        return None
