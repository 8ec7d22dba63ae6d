"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.client_store import IClientStore
from src.core.interfaces.invoice_store import IInvoiceStore
from src.core.interfaces.payment_store import IPaymentStore
from src.core.interfaces.quotation_store import IQuotationStore
from src.core.interfaces.sequencer import IDocumentSequencer

__all__ = [
    "IClientStore",
    "IInvoiceStore",
    "IQuotationStore",
    "IPaymentStore",
    "IDocumentSequencer",
]
