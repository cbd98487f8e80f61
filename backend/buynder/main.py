"""
Buynder API application.

WHAT: Builds the FastAPI app the web client talks to
WHY: One place that wires config, logging, error translation, and routes
HOW: Module-level app with CORS, exception handlers, and the v1 router
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import api_router
from .core.config import settings
from .core.session_manager import conversation_manager
from .core.watchlist import watchlist
from .middleware.error_handler import register_exception_handlers
from .utils.logger import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup and shutdown hooks.

    Nothing is persisted, so shutdown only drops the in-memory
    conversations and watchlist.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(
        f"Seller phrasing={settings.PHRASE_SELECTION}, "
        f"reply delay={settings.SELLER_REPLY_DELAY_SECONDS}s, "
        f"coach delay={settings.BUYER_HELPER_DELAY_SECONDS}s"
    )
    yield
    logger.info(
        f"Stopping: discarding {len(conversation_manager.list_conversations())} conversation(s) "
        f"and {len(watchlist.items())} saved listing(s)"
    )
    conversation_manager.clear()
    watchlist.clear()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Swipe filter, simulated seller, and negotiation coach for marketplace listings",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/")
async def root():
    """Service banner with a pointer to the health route."""
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("buynder.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
