# crm/models/enums/quotation_status.py
import enum


class QuotationStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    completed = "completed"


ALLOWED_STATUS_TRANSITIONS = {
    QuotationStatus.pending: {QuotationStatus.approved, QuotationStatus.rejected},
    QuotationStatus.approved: {QuotationStatus.completed},
    QuotationStatus.rejected: set(),
    QuotationStatus.completed: set(),
}

TERMINAL_STATUSES = {
    status for status, targets in ALLOWED_STATUS_TRANSITIONS.items() if not targets
}
