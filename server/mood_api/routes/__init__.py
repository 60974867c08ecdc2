"""API route modules."""
from .dashboard import router as dashboard_router
from .trends import router as trends_router
from .correlations import router as correlations_router
from .export import router as export_router
from .observations import router as observations_router

__all__ = [
    "dashboard_router",
    "trends_router",
    "correlations_router",
    "export_router",
    "observations_router",
]
