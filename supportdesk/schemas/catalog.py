from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class CategoryCreate(BaseModel):
    name: str = ""


class CategoryOut(BaseModel):
    id: int
    business_id: int
    name: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class StatusCreate(BaseModel):
    name: str = ""
    description: Optional[str] = None
    color: str = "blue"


class StatusOut(BaseModel):
    # id/business_id/created_at are None for built-in statuses
    id: Optional[int] = None
    business_id: Optional[int] = None
    name: str
    description: Optional[str]
    color: str
    builtin: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
