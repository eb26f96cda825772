"""Product category endpoints."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import IntegrityError

from rentdesk.api.deps import SessionDep
from rentdesk.schemas.product import ProductCategoryCreate, ProductCategoryRead
from rentdesk.services import product_service

router = APIRouter()


@router.get("", response_model=list[ProductCategoryRead], summary="List categories")
async def list_categories(session: SessionDep) -> list[ProductCategoryRead]:
    categories = await product_service.list_categories(session)
    return [ProductCategoryRead.model_validate(obj) for obj in categories]


@router.post(
    "",
    response_model=ProductCategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
async def create_category(
    payload: ProductCategoryCreate, session: SessionDep
) -> ProductCategoryRead:
    try:
        category = await product_service.create_category(session, payload)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category name already exists",
        ) from exc
    return ProductCategoryRead.model_validate(category)
