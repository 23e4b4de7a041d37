from typing import List
from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_transaction_service
from app.schemas.transaction import TransactionCreate, TransactionResponse, TransactionUpdate
from app.services.transaction_service import TransactionService

router = APIRouter()

@router.get("/", response_model=List[TransactionResponse])
async def list_transactions(
    unsettled_only: bool = False,
    service: TransactionService = Depends(get_transaction_service)
):
    """List transactions, newest first"""
    transactions = await service.list(unsettled_only=unsettled_only)
    return [TransactionResponse.from_model(t) for t in transactions]

@router.post("/", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    transaction_in: TransactionCreate,
    service: TransactionService = Depends(get_transaction_service)
):
    """Record an advance awaiting reimbursement"""
    transaction = await service.create(
        transaction_in.title,
        transaction_in.amount_out_cents,
        transaction_in.category
    )
    return TransactionResponse.from_model(transaction)

@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    service: TransactionService = Depends(get_transaction_service)
):
    transaction = await service.get(transaction_id)
    return TransactionResponse.from_model(transaction)

@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: str,
    transaction_in: TransactionUpdate,
    service: TransactionService = Depends(get_transaction_service)
):
    """Edit title, amount and category"""
    transaction = await service.update(
        transaction_id,
        transaction_in.title,
        transaction_in.amount_out_cents,
        transaction_in.category
    )
    return TransactionResponse.from_model(transaction)

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: str,
    cascade: bool = False,
    service: TransactionService = Depends(get_transaction_service)
):
    """Delete a transaction; cascade reverses its settlements first"""
    await service.delete(transaction_id, cascade=cascade)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
