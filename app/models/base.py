from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from bson import ObjectId
from pydantic import BaseModel, Field, ConfigDict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_object_id() -> str:
    return str(ObjectId())


def to_object_id(value: str) -> ObjectId | None:
    """Parse an id string; None when it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class StoredModel(BaseModel):
    """
    A record owned by the ledger store.

    Ids are kept as strings in Python and as ObjectId in MongoDB; the
    document round trip happens only in ``to_document``/``from_document``.
    """
    id: str = Field(default_factory=new_object_id, validation_alias="_id")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

    def to_document(self) -> Dict[str, Any]:
        doc = self.model_dump(exclude={"id"})
        for key, value in doc.items():
            if isinstance(value, Enum):
                doc[key] = value.value
        doc["_id"] = ObjectId(self.id)
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]):
        doc = dict(doc)
        doc["_id"] = str(doc["_id"])
        return cls.model_validate(doc)
