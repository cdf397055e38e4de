from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portfolio.core.auth import require_admin
from portfolio.db.session import get_db_session
from portfolio.schemas.category import CategoryRead, CategoryWrite
from portfolio.schemas.common import SuccessResponse
from portfolio.services import category_service

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryRead])
def list_categories(db: Session = Depends(get_db_session)) -> list[CategoryRead]:
    return [CategoryRead.model_validate(c) for c in category_service.list_categories(db)]


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_category(payload: CategoryWrite, db: Session = Depends(get_db_session)) -> CategoryRead:
    return CategoryRead.model_validate(category_service.create_category(db, payload))


@router.put("/{category_id}", response_model=CategoryRead, dependencies=[Depends(require_admin)])
def update_category(
    category_id: str,
    payload: CategoryWrite,
    db: Session = Depends(get_db_session),
) -> CategoryRead:
    return CategoryRead.model_validate(category_service.update_category(db, category_id, payload))


@router.delete("/{category_id}", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
def delete_category(category_id: str, db: Session = Depends(get_db_session)) -> SuccessResponse:
    category_service.delete_category(db, category_id)
    return SuccessResponse()
