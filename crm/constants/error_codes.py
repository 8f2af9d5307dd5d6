# crm/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORAGE_ERROR = "STORAGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- AUTH ----------------
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    TOKEN_INVALID = "TOKEN_INVALID"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    USER_INACTIVE = "USER_INACTIVE"

    # ---------------- USERS ----------------
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_EMAIL_EXISTS = "USER_EMAIL_EXISTS"
    USER_ROLE_INVALID = "USER_ROLE_INVALID"

    # ---------------- QUOTATIONS ----------------
    QUOTATION_NOT_FOUND = "QUOTATION_NOT_FOUND"
    QUOTATION_INVALID_STATUS = "QUOTATION_INVALID_STATUS"
    QUOTATION_INVALID_TRANSITION = "QUOTATION_INVALID_TRANSITION"
    QUOTATION_FINAL_PRICE_REQUIRED = "QUOTATION_FINAL_PRICE_REQUIRED"
    QUOTATION_REJECTION_REASON_REQUIRED = "QUOTATION_REJECTION_REASON_REQUIRED"
    QUOTATION_SCOPE_INVALID = "QUOTATION_SCOPE_INVALID"

    # ---------------- NOTIFICATIONS ----------------
    NOTIFICATION_NOT_FOUND = "NOTIFICATION_NOT_FOUND"
