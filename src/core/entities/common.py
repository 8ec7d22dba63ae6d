"""Enumerations shared across billing documents."""

from enum import Enum


class Region(str, Enum):
    """Operating region. Codes are case-sensitive."""

    UAE = "UAE"
    SAUDI = "SAUDI"


class DocumentStatus(str, Enum):
    """Lifecycle status of a quotation or invoice."""

    DRAFT = "draft"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentMode(str, Enum):
    """How a payment was received."""

    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    CHEQUE = "cheque"
    OTHER = "other"
