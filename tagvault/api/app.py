"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from tagvault.api.state import AppState, get_state

# Import routes after state to avoid circular imports
from tagvault.api.routes import session, tags

__all__ = ["app", "AppState", "get_state"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    get_state().shutdown()


app = FastAPI(
    title="Tag Vault API",
    description="Local REST API for capacity-aware NFC vault tag writing",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tags.router, prefix="/api/tags", tags=["tags"])
app.include_router(session.router, prefix="/api/tags", tags=["session"])
