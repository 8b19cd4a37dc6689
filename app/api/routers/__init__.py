"""
app/api/routers package marker.
"""

from app.api.routers.fx_deals import router as fx_deals_router
from app.api.routers.import_errors import router as import_errors_router

__all__ = [
    "fx_deals_router",
    "import_errors_router",
]
