# app/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth import get_current_principal
from app.database import get_db
from app.models.profile import Profile
from app.schemas.dashboard import DashboardStatsOut
from app.services.dashboard_service import get_dashboard_stats

router = APIRouter()


@router.get("/dashboard", response_model=DashboardStatsOut, summary="Fleet and work order summary")
def read_dashboard(db: Session = Depends(get_db), principal: Profile = Depends(get_current_principal)):
    return get_dashboard_stats(db, principal)
