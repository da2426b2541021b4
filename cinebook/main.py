import asyncio
import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager
from cinebook.core.config import settings
from cinebook.core.exception_handlers import register_exception_handlers
from cinebook.api.deps import get_session_store
from cinebook.api.v1.router import api_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


async def _session_cleanup_loop() -> None:
    """Background task: drop idle seat selection sessions every 60 seconds."""
    store = get_session_store()
    while True:
        try:
            store.purge_expired()
        except Exception:
            logger.exception("Error during session cleanup.")
        await asyncio.sleep(60)


@asynccontextmanager
async def lifespan(app: FastAPI):
    cleanup_task = asyncio.create_task(_session_cleanup_loop())
    yield

    # Shutdown: cancel background task
    cleanup_task.cancel()
    try:
        await cleanup_task
    except asyncio.CancelledError:
        pass


from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# The mobile client and Expo web preview call from anywhere
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def read_root():
    return {"Hello": "CineBook"}
