# server/main.py

from contextlib import asynccontextmanager
import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from server.api import auth, health, hypes, posts
from server.core import config
from server.core.errors import setup_error_handlers
from server.core.logging import setup_logging
from server.database import init_db


setup_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    logger.info("database_initialized", url=config.DATABASE_URL)
    yield


app = FastAPI(title="IF-Social", lifespan=lifespan)

setup_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(posts.router)
app.include_router(hypes.router)


def run():
    uvicorn.run("server.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
