from datetime import datetime
from pydantic import BaseModel, ConfigDict, StrictInt

from app.models.transaction import Transaction, TransactionCategory, TransactionStatus


class TransactionCreate(BaseModel):
    """Request body to record an advance."""
    title: str
    amount_out_cents: StrictInt
    category: TransactionCategory = TransactionCategory.WORK


class TransactionUpdate(BaseModel):
    """Request body to edit an advance. All fields are rewritten."""
    title: str
    amount_out_cents: StrictInt
    category: TransactionCategory


class TransactionResponse(BaseModel):
    id: str
    title: str
    amount_out_cents: int
    amount_reimbursed_cents: int
    outstanding_cents: int
    category: TransactionCategory
    status: TransactionStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_model(cls, transaction: Transaction) -> "TransactionResponse":
        return cls(
            id=transaction.id,
            title=transaction.title,
            amount_out_cents=transaction.amount_out_cents,
            amount_reimbursed_cents=transaction.amount_reimbursed_cents,
            outstanding_cents=transaction.outstanding_cents(),
            category=transaction.category,
            status=transaction.status,
            created_at=transaction.created_at,
            updated_at=transaction.updated_at
        )
