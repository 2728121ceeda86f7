from fastapi import APIRouter

from quizcircle.core.config import settings

router = APIRouter(tags=["Misc"])

@router.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV, "ai_enabled": bool(settings.GEMINI_API_KEY)}
