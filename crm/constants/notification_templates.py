# crm/constants/notification_templates.py

from crm.models.enums.notification_type import NotificationType
from crm.models.enums.quotation_status import QuotationStatus


# status -> (message template, notification type)
QUOTATION_STATUS_MESSAGES = {
    QuotationStatus.approved: (
        "Your quotation for {service} has been approved with a final price of ${final_price}",
        NotificationType.success,
    ),
    QuotationStatus.rejected: (
        "Your quotation for {service} has been rejected. Reason: {rejection_reason}",
        NotificationType.error,
    ),
    QuotationStatus.completed: (
        "Your quotation for {service} has been marked as completed",
        NotificationType.success,
    ),
}

DEFAULT_STATUS_MESSAGE = (
    "Your quotation for {service} has been updated to {status}",
    NotificationType.info,
)
