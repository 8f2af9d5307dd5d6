from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Enum, Index, CheckConstraint, Date
from sqlalchemy.orm import relationship
from crm.core.db import Base
from crm.models.base.mixins import TimestampMixin, UTCDateTime
from crm.models.enums.quotation_status import QuotationStatus


class Quotation(Base, TimestampMixin):
    __tablename__ = "quotations"

    id = Column(Integer, primary_key=True)

    # customer request
    service = Column(String(200), nullable=False)
    enterprise_name = Column(String(200), nullable=False)
    contact_number = Column(String(50), nullable=False)
    email = Column(String(254), nullable=False)
    budget = Column(Numeric(14, 2), nullable=False)
    description = Column(String, nullable=False)

    # review terms
    status = Column(Enum(QuotationStatus), nullable=False, default=QuotationStatus.pending, index=True)
    final_price = Column(Numeric(14, 2), nullable=True)
    notes = Column(String, nullable=True)
    proposed_delivery_date = Column(Date, nullable=True)
    rejection_reason = Column(String, nullable=True)
    approved_at = Column(UTCDateTime, nullable=True)
    completed_at = Column(UTCDateTime, nullable=True)

    # ownership
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    admin_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    owner = relationship("User", foreign_keys=[owner_id], lazy="selectin")
    admin = relationship("User", foreign_keys=[admin_id], lazy="selectin")

    __table_args__ = (
        Index("ix_quotation_admin_status", "admin_id", "status"),
        CheckConstraint("budget >= 0", name="ck_quotation_budget_non_negative"),
        CheckConstraint("final_price IS NULL OR final_price >= 0", name="ck_quotation_final_price_non_negative"),
    )

    def __repr__(self):
        return f"<Quotation id={self.id} status={self.status} owner_id={self.owner_id}>"
