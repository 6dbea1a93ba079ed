from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from huepick import __version__
from huepick.api.v1 import get_analyzer, router as v1_router
from huepick.config import config
from huepick.schemas import HealthResponse
from huepick.utils.logging import get_logger

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("HuePick starting", extra={"version": __version__})
    yield
    # Drop cached pixel buffers on shutdown
    get_analyzer().close()
    logger.info("HuePick shutdown complete")


app = FastAPI(
    title="HuePick Color Engine",
    description="Color sampling, palette extraction, model conversion and naming",
    version=__version__,
    lifespan=lifespan
)

allowed_origins = [origin for origin in config.ALLOWED_ORIGINS.split(",") if origin]

# Add CORS middleware with basic configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins or ["http://localhost:8081", "http://localhost:19006"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def healthz():
    return {"ok": True, "version": __version__, "service": "huepick"}
