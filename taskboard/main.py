import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.config import CORS_ORIGINS, HOST, LOG_DIR, LOG_LEVEL, PORT
from taskboard.database import init_db
from taskboard.errors import register_error_handlers
from taskboard.logging_setup import setup_logging
from taskboard.routes.auth_routes import router as auth_router
from taskboard.routes.task_routes import router as task_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs under `taskboard` and plain `uvicorn taskboard.main:app` alike.
    setup_logging(LOG_LEVEL, LOG_DIR or None)
    try:
        init_db()
    except Exception as e:
        # Tables may already exist under a DB user without CREATE privileges.
        logger.error(f"Database init skipped or failed: {e}")
    yield


app = FastAPI(title="Taskboard", lifespan=lifespan)

@app.get("/api/health-check")
async def health():
    return {"status": "ok", "message": "Backend is alive!"}

# Configure CORS for the browser client
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router)
app.include_router(task_router)


def run():
    uvicorn.run("taskboard.main:app", host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    run()
