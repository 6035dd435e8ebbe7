"""
Describer API
=============

HTTP routers.
"""

from .webhook import router as event_router

__all__ = ["event_router"]
