# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from . import config
from .database import ensure_indexes, get_database, ping
from .errors import AuthError, DemokratError, Forbidden
from .routes.admin_routes import router as admin_router
from .routes.election_routes import router as election_router
from .routes.vote_routes import vote_router

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


def _resolve_database(app: FastAPI):
    provider = app.dependency_overrides.get(get_database, get_database)
    return provider()


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_indexes(_resolve_database(app))
    logger.info(f"Session counter backend: {config.SESSION_COUNTER_BACKEND}")
    yield


app = FastAPI(title="demokrat - Election and Voting API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DemokratError)
async def demokrat_error_handler(request: Request, exc: DemokratError):
    headers = None
    if isinstance(exc, AuthError) and not isinstance(exc, Forbidden):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


app.include_router(admin_router)
app.include_router(election_router)
app.include_router(vote_router)


@app.get("/health", tags=["Root"])
def health_check():
    if not ping(_resolve_database(app)):
        return JSONResponse(status_code=503, content={"status": "unhealthy", "database": "MongoDB"})
    return {"status": "healthy", "database": "MongoDB"}


@app.get("/", tags=["Root"])
def read_root():
    return {"message": "Welcome to the demokrat voting API"}


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=204)
