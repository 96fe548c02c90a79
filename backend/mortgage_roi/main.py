from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mortgage_roi import __version__
from mortgage_roi.config import settings
from mortgage_roi.api.routes import health, comparison

app = FastAPI(title="Mortgage ROI Engine", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(comparison.router, prefix="/api")
