# server/api/health.py

from fastapi import APIRouter
from server.core.clock import now_ms


router = APIRouter()


@router.get("/health")
def health():
    return {"ok": True, "timestamp": now_ms()}
