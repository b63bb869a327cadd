import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from runtracker.api.activities import router as activities_router
from runtracker.api.goals import router as goals_router
from runtracker.api.stats import router as stats_router
from runtracker.db import Base, engine
from runtracker.models.activity import Activity  # noqa: F401  (import ensures table is registered)
from runtracker.models.goal import Goal  # noqa: F401
from runtracker.core.config import settings
from runtracker.storage.base import StorageError


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("runtracker")

app = FastAPI(title="Run Tracker API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables (goals, activities) on startup; Alembic owns later changes
if settings.storage_backend == "sql":
    Base.metadata.create_all(bind=engine)

app.include_router(activities_router)
app.include_router(goals_router)
app.include_router(stats_router)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Storage error"})


@app.get("/")
def root():
    return {"message": "Run Tracker backend is running"}


@app.get("/health")
def health():
    return {"status": "ok"}
