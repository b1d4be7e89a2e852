import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.routers import logs
from kubelogs.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app = FastAPI(
    title="kubelogs Backend API",
    version="1.0.0",
    description="Workload-level Kubernetes log collection",
)

# CORS (for the gradio UI and other tools)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten later for prod
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Status"])
def root():
    """Simple health endpoint."""
    return {"status": "kubelogs Backend Running"}


# Attach routers under /api/*
app.include_router(logs.router, prefix="/api")
