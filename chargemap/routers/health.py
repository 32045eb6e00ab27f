from datetime import datetime

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from ..db import get_engine

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """
    Basic health check endpoint.

    Returns:
        {
            "status": "ok",
            "db": "ok"
        }
    """
    try:
        engine = get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return {
            "status": "ok",
            "db": "ok"
        }
    except Exception:
        raise HTTPException(status_code=500, detail="Database connection failed")


@router.get("/healthz")
def healthz():
    """Liveness probe: no dependency checks."""
    return {
        "ok": True,
        "time": datetime.utcnow().isoformat(),
    }
