from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health():
    return {
        "status": "OK",
        "message": "Entropy Productions API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
