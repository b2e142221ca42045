from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from supportdesk.api.deps import get_current_business, get_db
from supportdesk.models.business import Business
from supportdesk.schemas.catalog import CategoryCreate, CategoryOut, StatusCreate, StatusOut
from supportdesk.services import catalog

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
):
    return catalog.list_categories(db, business.id)


@router.post("/categories", response_model=CategoryOut, status_code=201)
def add_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
):
    return catalog.add_category(db, business.id, payload.name)


@router.delete("/categories/{category_id}")
def remove_category(
    category_id: int,
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
):
    catalog.remove_category(db, business.id, category_id)
    return {"ok": True}


@router.get("/statuses", response_model=List[StatusOut])
def list_statuses(
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
):
    """Built-in statuses first, then this business's own in creation order."""
    return catalog.list_statuses(db, business.id)


@router.post("/statuses", response_model=StatusOut, status_code=201)
def add_status(
    payload: StatusCreate,
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
):
    return catalog.add_status(db, business.id, payload.name, payload.description, payload.color)


@router.delete("/statuses/{status_id}")
def remove_status(
    status_id: int,
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
):
    catalog.remove_status(db, business.id, status_id)
    return {"ok": True}
