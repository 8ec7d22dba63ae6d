"""Payment domain entity."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from src.core.entities.common import PaymentMode, Region


class Payment(BaseModel):
    """Money received against exactly one invoice."""

    id: int | None = None
    invoice_id: int
    region: Region | None = None  # copied from the owning invoice on insert
    amount: float = Field(..., gt=0)
    payment_date: date = Field(default_factory=date.today)
    payment_mode: PaymentMode = PaymentMode.BANK_TRANSFER
    reference_number: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
