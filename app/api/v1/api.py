from fastapi import APIRouter
from app.api.v1.endpoints import transactions, salary_logs, settlements, summary

api_router = APIRouter()

api_router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
api_router.include_router(salary_logs.router, prefix="/salary_logs", tags=["salary logs"])
api_router.include_router(settlements.router, tags=["settlements"])
api_router.include_router(summary.router, tags=["summary"])
