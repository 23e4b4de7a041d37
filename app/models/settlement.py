from datetime import datetime

from pydantic import Field, ConfigDict

from app.models.base import StoredModel, _utcnow


class Settlement(StoredModel):
    """One allocation of a salary log's balance to a transaction. Immutable."""
    transaction_id: str
    salary_log_id: str
    amount_cents: int
    created_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        frozen=True
    )
