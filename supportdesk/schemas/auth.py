from pydantic import BaseModel, field_validator
from typing import Optional

from supportdesk.schemas.business import BusinessOut


class Credentials(BaseModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class SignUpRequest(Credentials):
    business_name: str
    phone: Optional[str] = None
    contact_email: Optional[str] = None


class UserOut(BaseModel):
    id: str
    email: Optional[str]

    class Config:
        from_attributes = True


class SessionOut(BaseModel):
    user: UserOut
    access_token: Optional[str] = None
    business: Optional[BusinessOut] = None
