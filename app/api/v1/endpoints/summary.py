from fastapi import APIRouter, Depends

from app.api.deps import get_summary_service
from app.schemas.summary import SummaryView
from app.services.summary_service import SummaryService

router = APIRouter()

@router.get("/summary", response_model=SummaryView)
async def get_summary(service: SummaryService = Depends(get_summary_service)):
    """Debt owed, cash waiting allocation and savings, computed on demand"""
    return await service.get_summary()
