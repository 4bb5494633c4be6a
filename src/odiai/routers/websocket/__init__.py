# routers/websocket/__init__.py
"""
WebSocket router module for interactive translation sessions.

- /ws/translate - debounced translate-as-you-type session
"""

from fastapi import APIRouter

from .translate import router as translate_router

router = APIRouter()
router.include_router(translate_router)

__all__ = ["router"]
