"""
Root and health check endpoints
"""

from fastapi import APIRouter

router = APIRouter(tags=["root"])


@router.get("/")
async def root():
    """API root endpoint - returns API information"""
    return {
        "name": "Chat Relay API",
        "version": "0.1.0",
        "docs": "/docs",
        "endpoints": {
            "chat": "/api/chat",
            "health": "/health",
        }
    }


@router.get("/health")
async def health():
    return {"status": "ok"}
