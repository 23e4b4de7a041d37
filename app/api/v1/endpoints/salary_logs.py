from typing import List
from fastapi import APIRouter, Depends, status

from app.api.deps import get_salary_log_service
from app.schemas.salary_log import SalaryLogCreate, SalaryLogResponse
from app.services.salary_log_service import SalaryLogService

router = APIRouter()

@router.get("/", response_model=List[SalaryLogResponse])
async def list_salary_logs(
    available_only: bool = False,
    service: SalaryLogService = Depends(get_salary_log_service)
):
    """List salary logs, newest first"""
    salary_logs = await service.list(available_only=available_only)
    return [SalaryLogResponse.from_model(s) for s in salary_logs]

@router.post("/", response_model=SalaryLogResponse, status_code=status.HTTP_201_CREATED)
async def create_salary_log(
    salary_log_in: SalaryLogCreate,
    service: SalaryLogService = Depends(get_salary_log_service)
):
    """Record money received"""
    salary_log = await service.create(
        salary_log_in.amount_cents,
        salary_log_in.month,
        salary_log_in.source,
        salary_log_in.remark
    )
    return SalaryLogResponse.from_model(salary_log)

@router.get("/{salary_log_id}", response_model=SalaryLogResponse)
async def get_salary_log(
    salary_log_id: str,
    service: SalaryLogService = Depends(get_salary_log_service)
):
    salary_log = await service.get(salary_log_id)
    return SalaryLogResponse.from_model(salary_log)
