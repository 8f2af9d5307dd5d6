from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime, date

from crm.models.enums.quotation_status import QuotationStatus

# =====================================================
# QUOTATION CREATE / UPDATE
# =====================================================

class QuotationCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    service: str = Field(min_length=1, max_length=200)
    enterprise_name: str = Field(min_length=1, max_length=200)
    contact_number: str = Field(min_length=1, max_length=50)
    email: EmailStr
    budget: Decimal = Field(ge=0, max_digits=14, decimal_places=2)
    description: str = Field(min_length=1)


class QuotationUpdate(BaseModel):
    """Status and commercial terms; the customer request itself is immutable."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    # validated against QuotationStatus in the service layer
    status: Optional[str] = None
    final_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    notes: Optional[str] = None
    proposed_delivery_date: Optional[date] = None
    rejection_reason: Optional[str] = None


# =====================================================
# QUOTATION RESPONSE
# =====================================================

class QuotationOut(BaseModel):
    id: int
    service: str
    enterprise_name: str
    contact_number: str
    email: str
    budget: Decimal
    description: str

    status: QuotationStatus
    final_price: Optional[Decimal] = None
    notes: Optional[str] = None
    proposed_delivery_date: Optional[date] = None
    rejection_reason: Optional[str] = None
    approved_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    owner_id: int
    admin_id: Optional[int] = None

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# =====================================================
# QUOTATION LIST RESPONSE
# =====================================================

class QuotationListData(BaseModel):
    total: int
    page: int
    page_size: int
    items: List[QuotationOut]
