import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared_lib.config import load_config
from core_svc.database import init_db
from core_svc.mailer import MailDispatcher
from core_svc.routers.media import router as media_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.
    Opens the database and builds the mail dispatcher; closes the database on shutdown.
    """
    config = load_config()
    app.state.db = await init_db(config.database_path)

    if config.resend_api_key:
        app.state.mailer = MailDispatcher(config.resend_api_key)
    else:
        logger.warning("RESEND_API_KEY not set, email notifications disabled")
        app.state.mailer = None

    yield

    await app.state.db.close()


app = FastAPI(
    title="MemoryLane Core",
    version="0.1.0",
    lifespan=lifespan
)

app.include_router(media_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    config = load_config()
    uvicorn.run(app, host=config.core_host, port=config.core_port)
