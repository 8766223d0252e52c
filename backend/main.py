from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import estimate

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("paintestimator")

app = FastAPI(
    title=settings.APP_NAME,
    description="Paint quantity estimator: room dimensions and openings in, area and paint volume out",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(estimate.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "paint-estimator"}


@app.on_event("startup")
def log_startup():
    logger.info("%s started (default units: %s)", settings.APP_NAME, settings.DEFAULT_UNIT_SYSTEM)
