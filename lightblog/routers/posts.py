import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse

from lightblog import dependencies as deps
from lightblog.repos.posts_repo import FilePostsRepo, PostRenderError
from lightblog.schemas.blog import PagedPosts, RenderedPost
from lightblog.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=PagedPosts, name="home")
def list_posts(
    page: int = 1,
    repo: FilePostsRepo = Depends(deps.get_posts_repo),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Get one page of posts, newest first."""
    try:
        return repo.get_paged(page, current_settings.PAGE_SIZE)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts for page {page}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/top", response_model=List[RenderedPost])
def top_posts(
    count: Optional[int] = Query(default=None, ge=0),
    repo: FilePostsRepo = Depends(deps.get_posts_repo),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Most recent posts, for the sidebar."""
    if count is None:
        count = current_settings.TOP_POSTS_COUNT
    try:
        return repo.get_top_posts(count)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error getting top {count} posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/{year}/{month}/{name}", response_model=RenderedPost, name="post")
def get_post(
    year: int,
    month: int,
    name: str,
    request: Request,
    repo: FilePostsRepo = Depends(deps.get_posts_repo),
):
    """Get a single post; unknown posts redirect to the first page."""
    logger.info(f"Getting post year {year}, month {month}, name: {name}")
    try:
        post = repo.find_post(year, month, name)
    except PostRenderError as e:
        logger.error(f"{e}: {e.__cause__}")
        raise HTTPException(status_code=500, detail="Failed to render post")

    if post is None:
        logger.info("Post not found!")
        return RedirectResponse(url=str(request.url_for("home")), status_code=302)
    return post
