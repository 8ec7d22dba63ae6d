"""Client domain entity."""

from datetime import datetime

from pydantic import BaseModel

from src.core.entities.common import Region


class Client(BaseModel):
    """A billed customer, scoped to one region."""

    id: int | None = None
    name: str
    region: Region
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    trn: str | None = None  # tax registration number
    created_at: datetime | None = None
