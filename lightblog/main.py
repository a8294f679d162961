import logging

from fastapi import FastAPI

from lightblog.routers import posts, rss
from lightblog.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="LightBlog", description="Markdown blog served from disk")

app.include_router(rss.router)
app.include_router(posts.router)

logger.info(f"Serving posts from {settings.posts_directory}")
