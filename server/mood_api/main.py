"""Mood Analytics API - FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routes import dashboard, trends, correlations, export, observations

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Mood Analytics API",
    description="Read-only API for mood trends, streaks, correlations and exports",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include routers
app.include_router(dashboard.router)
app.include_router(trends.router)
app.include_router(correlations.router)
app.include_router(observations.router)
app.include_router(export.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "mood-analytics-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.mood_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
