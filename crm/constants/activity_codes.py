# crm/constants/activity_codes.py

from enum import Enum


class ActivityCode(str, Enum):
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"

    CREATE_USER = "CREATE_USER"

    CREATE_QUOTATION = "CREATE_QUOTATION"
    UPDATE_QUOTATION = "UPDATE_QUOTATION"
    CHANGE_QUOTATION_STATUS = "CHANGE_QUOTATION_STATUS"
