from typing import Literal

from fastapi import APIRouter, Depends, Query, status as http_status
from sqlalchemy.ext.asyncio import AsyncSession

from crm.core.db import get_db
from crm.utils.get_user import get_current_user
from crm.utils.response import success_response, APIResponse, ErrorResponse

from crm.schemas.quotations.quotation_schemas import (
    QuotationCreate,
    QuotationUpdate,
    QuotationOut,
    QuotationListData,
)

from crm.services.quotations.quotation_service import (
    create_quotation,
    get_quotation,
    list_quotations,
    update_status_and_terms,
)

router = APIRouter(
    prefix="/quotations",
    tags=["Quotations"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.post(
    "",
    response_model=APIResponse[QuotationOut],
    status_code=http_status.HTTP_201_CREATED,
)
async def create_quotation_api(
    payload: QuotationCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    quotation = await create_quotation(db, payload, user)
    return success_response(
        "Quotation created successfully",
        quotation,
    )


@router.get(
    "",
    response_model=APIResponse[QuotationListData],
)
async def list_quotations_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    scope: str | None = Query(None, description="user | admin | superadmin; defaults to the caller's role"),
    status: str | None = Query(None, description="Filter by status (e.g., pending, approved)"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: Literal["asc", "desc"] = Query("desc"),
):
    data = await list_quotations(
        db=db,
        user=user,
        scope=scope,
        status=status,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response(
        "Quotations retrieved successfully",
        data,
    )


@router.get(
    "/{quotation_id}",
    response_model=APIResponse[QuotationOut],
)
async def get_quotation_api(
    quotation_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    quotation = await get_quotation(
        db=db,
        quotation_id=quotation_id,
        user=user,
    )
    return success_response(
        "Quotation retrieved successfully",
        quotation,
    )


@router.put(
    "/{quotation_id}",
    response_model=APIResponse[QuotationOut],
)
async def update_quotation_api(
    quotation_id: int,
    payload: QuotationUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    quotation = await update_status_and_terms(
        db=db,
        quotation_id=quotation_id,
        payload=payload,
        user=user,
    )
    return success_response(
        "Quotation updated successfully",
        quotation,
    )
