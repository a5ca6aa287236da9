"""
Admin dashboard statistics endpoint.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.deps import require_admin
from app.core.database import get_session
from app.schemas.stats import StatsResponse
from app.services.stats_service import get_dashboard_stats

router = APIRouter(
    prefix="/admin/stats",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=StatsResponse)
async def get_stats(session: Session = Depends(get_session)):
    """Counts, lessons per level, and the most recent topics and lessons."""
    return StatsResponse(data=get_dashboard_stats(session))
