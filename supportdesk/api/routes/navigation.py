from typing import Optional

from fastapi import APIRouter, Depends, Query

from supportdesk.core.auth import User, get_optional_user
from supportdesk.core.navigation import resolve_page
from supportdesk.schemas.dashboard import NavigationOut

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.get("", response_model=NavigationOut)
def navigate(
    path: str = Query("/", description="Client path, query string included"),
    current_user: Optional[User] = Depends(get_optional_user),
):
    resolution = resolve_page(path, authenticated=current_user is not None)
    return {
        "page": resolution.page.value,
        "redirect_to": resolution.redirect_to,
        "business_id": resolution.business_id,
    }
