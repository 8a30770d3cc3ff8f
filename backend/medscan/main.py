"""
Medicine Label Scanner - FastAPI Backend

Photo of a medicine label in, positioned medicine name markers out.
"""

from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from the backend directory before reading configuration
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from medscan import __version__
from medscan.config.settings import get_default_config
from medscan.cross_cutting.logging import setup_logging
from medscan.scan_router import router as scan_router

config = get_default_config()
setup_logging(config.logging)

app = FastAPI(
    title="Medicine Label Scanner API",
    description="Identifies medicine names on label photos with fallback over vision backends",
    version=__version__
)

# NOTE: restrict allow_origins to a whitelist in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(scan_router)


@app.get("/")
async def root():
    return {
        "service": "Medicine Label Scanner API",
        "version": __version__,
        "endpoints": ["/scan", "/scan/base64", "/medicines/{name}", "/health"],
    }
