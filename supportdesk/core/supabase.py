"""
Supabase Auth and Storage through the ``supabase`` client.

Table access does not go through this client; it uses SQLAlchemy against
the project's Postgres instead. Clients are created on first use so the
app can start without Supabase credentials (tests inject their own).
"""
import logging
from typing import Optional

import httpx
from supabase import AuthApiError, Client, ClientOptions, StorageException, create_client
from supabase import AuthError as SupabaseAuthError

from supportdesk.core.auth import AuthSession, User, user_from_claims, verify_token
from supportdesk.core.errors import AuthError, RemoteOperationError

logger = logging.getLogger(__name__)

# Statuses that mean "the caller got it wrong" rather than "the service is down"
CLIENT_ERROR_STATUSES = (400, 401, 403, 422)


def get_supabase_client(url: str, key: str) -> Client:
    """Server-side client: no persisted session, no background token refresh."""
    return create_client(
        url,
        key,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )


def _session_from(response) -> AuthSession:
    # With email confirmation on, sign-up returns a user but no session
    if response.user is None:
        raise RemoteOperationError("Authentication service returned no user")
    user = User(
        user_id=response.user.id,
        email=response.user.email,
        role=response.user.role,
    )
    access_token = response.session.access_token if response.session else None
    return AuthSession(user=user, access_token=access_token)


class SupabaseIdentity:
    def __init__(
        self,
        url: str,
        anon_key: str,
        jwt_secret: Optional[str] = None,
        client: Optional[Client] = None,
    ):
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.jwt_secret = jwt_secret
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase_client(self.url, self.anon_key)
        return self._client

    def _call(self, action: str, fn, *args):
        try:
            return fn(*args)
        except AuthApiError as e:
            if e.status in CLIENT_ERROR_STATUSES:
                raise AuthError(e.message) from e
            logger.error("Supabase Auth %s returned %s: %s", action, e.status, e.message)
            raise RemoteOperationError("Authentication service error") from e
        except SupabaseAuthError as e:
            logger.exception("Supabase Auth %s failed", action)
            raise RemoteOperationError("Authentication service is unavailable") from e

    def sign_up(self, email: str, password: str) -> AuthSession:
        response = self._call("sign up", self.client.auth.sign_up, {"email": email, "password": password})
        return _session_from(response)

    def sign_in(self, email: str, password: str) -> AuthSession:
        response = self._call(
            "sign in", self.client.auth.sign_in_with_password, {"email": email, "password": password}
        )
        return _session_from(response)

    def sign_out(self, access_token: str) -> None:
        # Revokes the given token, not whatever session the shared client holds
        self._call("sign out", self.client.auth.admin.sign_out, access_token)

    def get_user(self, access_token: str) -> User:
        payload = verify_token(access_token, self.url, jwt_secret=self.jwt_secret)
        return user_from_claims(payload)


class SupabaseStorage:
    def __init__(self, url: str, anon_key: str, bucket: str, client: Optional[Client] = None):
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.bucket = bucket
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase_client(self.url, self.anon_key)
        return self._client

    def upload(self, key: str, content: bytes, content_type: str) -> None:
        try:
            self.client.storage.from_(self.bucket).upload(
                key,
                content,
                file_options={"content-type": content_type or "application/octet-stream", "upsert": "false"},
            )
        except StorageException as e:
            logger.error("Upload of %s to bucket %s rejected: %s", key, self.bucket, e)
            raise RemoteOperationError("Could not upload attachment") from e
        except httpx.HTTPError as e:
            logger.exception("Upload of %s to bucket %s failed", key, self.bucket)
            raise RemoteOperationError("Could not upload attachment") from e
        logger.info("Uploaded %s to bucket %s", key, self.bucket)

    def public_url(self, key: str) -> str:
        return self.client.storage.from_(self.bucket).get_public_url(key)
