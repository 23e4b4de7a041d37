from typing import List, Optional
from fastapi import APIRouter, Depends

from app.api.deps import get_settlement_service
from app.schemas.salary_log import SalaryLogResponse
from app.schemas.settlement import SettleRequest, SettleResponse, SettlementResponse
from app.schemas.transaction import TransactionResponse
from app.services.settlement_service import SettlementService

router = APIRouter()

@router.post("/settle", response_model=SettleResponse)
async def settle(
    payload: SettleRequest,
    service: SettlementService = Depends(get_settlement_service)
):
    """Settle part of a transaction from a salary log's unused balance"""
    outcome = await service.settle(
        payload.transaction_id,
        payload.salary_log_id,
        payload.amount_cents
    )
    return SettleResponse(
        transaction=TransactionResponse.from_model(outcome.transaction),
        salary_log=SalaryLogResponse.from_model(outcome.salary_log),
        settlement=SettlementResponse.from_model(outcome.settlement)
    )

@router.get("/settlements/", response_model=List[SettlementResponse])
async def list_settlements(
    transaction_id: Optional[str] = None,
    salary_log_id: Optional[str] = None,
    service: SettlementService = Depends(get_settlement_service)
):
    """List settlement records, oldest first"""
    settlements = await service.list_settlements(
        transaction_id=transaction_id,
        salary_log_id=salary_log_id
    )
    return [SettlementResponse.from_model(s) for s in settlements]
