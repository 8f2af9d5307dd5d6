from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, asc, desc

from crm.models.quotations.quotation_models import Quotation
from crm.models.base.mixins import utcnow
from crm.models.enums.quotation_status import (
    QuotationStatus,
    ALLOWED_STATUS_TRANSITIONS,
    TERMINAL_STATUSES,
)

from crm.schemas.quotations.quotation_schemas import (
    QuotationCreate,
    QuotationUpdate,
    QuotationOut,
    QuotationListData,
)

from crm.core.db import commit_or_raise, flush_or_raise
from crm.core.exceptions import ValidationError, NotFoundError
from crm.core.permissions import (
    Action,
    ListScope,
    Ownership,
    Principal,
    authorize,
    default_scope,
)
from crm.constants.error_codes import ErrorCode
from crm.constants.activity_codes import ActivityCode
from crm.utils.activity_helpers import emit_activity
from crm.services.support.notification_service import notify_quotation_status
from crm.utils.logger import get_logger

logger = get_logger(__name__)

SORT_FIELDS = {
    "created_at": Quotation.created_at,
    "updated_at": Quotation.updated_at,
    "budget": Quotation.budget,
}

SORT_ORDERS = ("asc", "desc")

TERM_FIELDS = ("final_price", "notes", "proposed_delivery_date", "rejection_reason")


# =====================================================
# HELPERS
# =====================================================

def _parse_status(value: str | None, field: str = "status") -> QuotationStatus | None:
    if value is None:
        return None
    try:
        return QuotationStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in QuotationStatus)
        raise ValidationError(
            f"Invalid {field} '{value}'. Allowed: {allowed}",
            ErrorCode.QUOTATION_INVALID_STATUS,
        )


def _parse_scope(value: str | None, principal: Principal) -> ListScope:
    if value is None:
        return default_scope(principal)
    try:
        return ListScope(value)
    except ValueError:
        raise ValidationError(
            f"Invalid scope '{value}'",
            ErrorCode.QUOTATION_SCOPE_INVALID,
        )


def _scope_conditions(scope: ListScope, principal: Principal) -> list:
    if scope == ListScope.USER:
        return [Quotation.owner_id == principal.id]
    if scope == ListScope.ADMIN:
        return [Quotation.admin_id == principal.id]
    return []


def validate_transition(
    current: QuotationStatus,
    target: QuotationStatus | None,
) -> None:
    """Reject edits to closed quotations and moves the lifecycle does not allow."""
    if current in TERMINAL_STATUSES:
        raise ValidationError(
            f"{current.value.capitalize()} quotations cannot be modified",
            ErrorCode.QUOTATION_INVALID_TRANSITION,
        )

    if target is None or target == current:
        return

    if target not in ALLOWED_STATUS_TRANSITIONS[current]:
        raise ValidationError(
            f"Cannot change status from {current.value} to {target.value}",
            ErrorCode.QUOTATION_INVALID_TRANSITION,
        )


async def _get_quotation_or_404(db: AsyncSession, quotation_id: int) -> Quotation:
    q = await db.get(Quotation, quotation_id)
    if not q:
        raise NotFoundError("Quotation not found", ErrorCode.QUOTATION_NOT_FOUND)
    return q


# =====================================================
# CREATE
# =====================================================

async def create_quotation(
    db: AsyncSession,
    payload: QuotationCreate,
    user,
) -> QuotationOut:
    principal = Principal.from_user(user)
    authorize(principal, Action.CREATE)

    now = utcnow()
    q = Quotation(
        **payload.model_dump(),
        status=QuotationStatus.pending,
        owner_id=principal.id,
        admin_id=principal.tenant_admin_id,
        created_at=now,
        updated_at=now,
    )
    db.add(q)
    await flush_or_raise(db)

    emit_activity(
        db,
        user,
        ActivityCode.CREATE_QUOTATION,
        target_id=q.id,
        service=q.service,
    )

    await commit_or_raise(db)

    logger.info(
        "Quotation created",
        extra={"quotation_id": q.id, "owner_id": q.owner_id, "admin_id": q.admin_id},
    )
    return QuotationOut.model_validate(q)


# =====================================================
# READ
# =====================================================

async def get_quotation(
    db: AsyncSession,
    quotation_id: int,
    user,
) -> QuotationOut:
    q = await _get_quotation_or_404(db, quotation_id)
    authorize(Principal.from_user(user), Action.READ, Ownership.from_quotation(q))
    return QuotationOut.model_validate(q)


async def list_quotations(
    db: AsyncSession,
    user,
    scope: str | None = None,
    status: str | None = None,
    page: int = 1,
    page_size: int = 20,
    sort_by: str = "created_at",
    order: str = "desc",
) -> QuotationListData:
    principal = Principal.from_user(user)
    list_scope = _parse_scope(scope, principal)
    authorize(principal, Action.LIST, scope=list_scope)

    conditions = _scope_conditions(list_scope, principal)

    status_filter = _parse_status(status)
    if status_filter:
        conditions.append(Quotation.status == status_filter)

    sort_col = SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise ValidationError("Invalid sort field")

    if order not in SORT_ORDERS:
        raise ValidationError("Invalid sort order. Allowed: asc, desc")

    total = await db.scalar(
        select(func.count(Quotation.id)).where(*conditions)
    )

    result = await db.execute(
        select(Quotation)
        .where(*conditions)
        .order_by(
            asc(sort_col) if order == "asc" else desc(sort_col),
            asc(Quotation.id) if order == "asc" else desc(Quotation.id),
        )
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    logger.debug(
        "Quotations listed",
        extra={"scope": list_scope.value, "user_id": principal.id, "total": total},
    )

    return QuotationListData(
        total=total or 0,
        page=page,
        page_size=page_size,
        items=[QuotationOut.model_validate(q) for q in result.scalars().all()],
    )


async def list_for_user(db: AsyncSession, user, **filters) -> QuotationListData:
    return await list_quotations(db, user, scope=ListScope.USER.value, **filters)


async def list_for_admin(db: AsyncSession, user, **filters) -> QuotationListData:
    return await list_quotations(db, user, scope=ListScope.ADMIN.value, **filters)


async def list_for_superadmin(db: AsyncSession, user, **filters) -> QuotationListData:
    return await list_quotations(db, user, scope=ListScope.SUPERADMIN.value, **filters)


# =====================================================
# UPDATE STATUS AND TERMS
# =====================================================

async def update_status_and_terms(
    db: AsyncSession,
    quotation_id: int,
    payload: QuotationUpdate,
    user,
) -> QuotationOut:
    q = await _get_quotation_or_404(db, quotation_id)
    authorize(Principal.from_user(user), Action.UPDATE, Ownership.from_quotation(q))

    # -------------------------
    # Validate everything before touching the record
    # -------------------------
    target = _parse_status(payload.status)
    validate_transition(q.status, target)

    status_changes = target is not None and target != q.status

    if target == QuotationStatus.approved and status_changes:
        if (payload.final_price if payload.final_price is not None else q.final_price) is None:
            raise ValidationError(
                "Final price is required when approving a quotation",
                ErrorCode.QUOTATION_FINAL_PRICE_REQUIRED,
            )

    if target == QuotationStatus.rejected and status_changes:
        if not (payload.rejection_reason or q.rejection_reason):
            raise ValidationError(
                "Rejection reason is required when rejecting a quotation",
                ErrorCode.QUOTATION_REJECTION_REASON_REQUIRED,
            )

    # -------------------------
    # Apply
    # -------------------------
    changes: list[str] = []

    for field in TERM_FIELDS:
        value = getattr(payload, field)
        if value is not None and value != getattr(q, field):
            setattr(q, field, value)
            changes.append(field)

    old_status = q.status
    if status_changes:
        q.status = target
        changes.append("status")

    if not changes:
        return QuotationOut.model_validate(q)

    now = q.touch()

    if status_changes:
        if target == QuotationStatus.approved:
            q.approved_at = now
            if q.proposed_delivery_date is None:
                q.proposed_delivery_date = date.today()
        elif target == QuotationStatus.completed:
            q.completed_at = now

        emit_activity(
            db,
            user,
            ActivityCode.CHANGE_QUOTATION_STATUS,
            target_id=q.id,
            old_status=old_status.value,
            new_status=target.value,
        )
        notify_quotation_status(db, q)

    term_changes = [c for c in changes if c != "status"]
    if term_changes:
        emit_activity(
            db,
            user,
            ActivityCode.UPDATE_QUOTATION,
            target_id=q.id,
            changes=", ".join(term_changes),
        )

    await commit_or_raise(db)

    logger.info(
        "Quotation updated",
        extra={"quotation_id": q.id, "changes": changes},
    )
    return QuotationOut.model_validate(q)
