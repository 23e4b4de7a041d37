from datetime import datetime
from pydantic import BaseModel, StrictInt

from app.models.settlement import Settlement
from app.schemas.salary_log import SalaryLogResponse
from app.schemas.transaction import TransactionResponse


class SettleRequest(BaseModel):
    """Request body to settle part of a transaction from a salary log."""
    transaction_id: str
    salary_log_id: str
    amount_cents: StrictInt


class SettlementResponse(BaseModel):
    id: str
    transaction_id: str
    salary_log_id: str
    amount_cents: int
    created_at: datetime

    @classmethod
    def from_model(cls, settlement: Settlement) -> "SettlementResponse":
        return cls(
            id=settlement.id,
            transaction_id=settlement.transaction_id,
            salary_log_id=settlement.salary_log_id,
            amount_cents=settlement.amount_cents,
            created_at=settlement.created_at
        )


class SettleResponse(BaseModel):
    transaction: TransactionResponse
    salary_log: SalaryLogResponse
    settlement: SettlementResponse
