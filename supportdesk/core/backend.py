"""
The hosted backend as one injected collaborator.

``Backend`` bundles the three capabilities the app depends on (identity,
tabular storage, object storage). It is built once at process start and
stored on ``app.state``; tests build one out of fakes.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from fastapi import Request
from sqlalchemy.orm import sessionmaker

if TYPE_CHECKING:
    from supportdesk.core.auth import AuthSession, User
    from supportdesk.core.config import Settings


class IdentityProvider(Protocol):
    def sign_up(self, email: str, password: str) -> "AuthSession": ...

    def sign_in(self, email: str, password: str) -> "AuthSession": ...

    def sign_out(self, access_token: str) -> None: ...

    def get_user(self, access_token: str) -> "User": ...


class ObjectStorage(Protocol):
    def upload(self, key: str, content: bytes, content_type: str) -> None: ...

    def public_url(self, key: str) -> str: ...


@dataclass
class Backend:
    identity: IdentityProvider
    sessions: sessionmaker
    storage: ObjectStorage


def build_backend(settings: "Settings") -> Backend:
    from supportdesk.core.database import SessionLocal
    from supportdesk.core.supabase import SupabaseIdentity, SupabaseStorage

    return Backend(
        identity=SupabaseIdentity(
            settings.SUPABASE_URL,
            settings.SUPABASE_ANON_KEY,
            jwt_secret=settings.SUPABASE_JWT_SECRET,
        ),
        sessions=SessionLocal,
        storage=SupabaseStorage(
            settings.SUPABASE_URL,
            settings.SUPABASE_ANON_KEY,
            bucket=settings.STORAGE_BUCKET,
        ),
    )


def get_backend(request: Request) -> Backend:
    return request.app.state.backend
