# app/router/asset_management/category_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.database import get_db
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.asset_management import category_crud as crud
from ...schemas.asset_management.category_schemas import CategoryCreate

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
)


@router.get("/{category}")
def get_categories(category: str, db: Session = Depends(get_db)):
    return success_response(data=crud.get_categories(db, category))


@router.post("/{category}", status_code=status.HTTP_201_CREATED)
def add_category(category: str, payload: CategoryCreate, db: Session = Depends(get_db)):
    return success_response(
        data=crud.add_category(db, category, payload.value),
        message="Category added successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.delete("/{category}/{category_id}")
def delete_category(category: str, category_id: int, db: Session = Depends(get_db)):
    return success_response(
        data=crud.delete_category(db, category, category_id),
        message="Category deleted",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY)
