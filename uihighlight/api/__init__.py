"""FastAPI endpoints for the UI highlight generator.

This sub-package provides REST API endpoints for:
- Uploading layout dumps and screenshots
- Running the highlight batch and polling its status
- Downloading single results or a ZIP export
"""

from .app import create_app
from .routes import batch_router

__all__ = [
    "create_app",
    "batch_router",
]
