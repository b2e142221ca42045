from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import parse_qs, urlsplit


class Page(str, Enum):
    LANDING = "landing"
    LOGIN = "login"
    SEARCH = "search"
    NEW_TICKET = "new_ticket"
    SETTINGS = "settings"
    DASHBOARD = "dashboard"


@dataclass(frozen=True)
class PageResolution:
    page: Page
    redirect_to: Optional[str] = None
    business_id: Optional[int] = None


def _business_id(query: str) -> Optional[int]:
    values = parse_qs(query).get("bid")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


def resolve_page(path: str, authenticated: bool) -> PageResolution:
    """Map a client path (with optional query string) and session state to a page."""
    parts = urlsplit(path or "/")
    route = parts.path.rstrip("/") or "/"

    if route == "/ticket":
        return PageResolution(Page.SEARCH)

    if route == "/new-ticket":
        business_id = _business_id(parts.query)
        if business_id is None:
            return PageResolution(Page.SEARCH, redirect_to="/ticket")
        return PageResolution(Page.NEW_TICKET, business_id=business_id)

    if route == "/login":
        return PageResolution(Page.DASHBOARD if authenticated else Page.LOGIN)

    if route == "/settings":
        if not authenticated:
            return PageResolution(Page.LOGIN, redirect_to="/login")
        return PageResolution(Page.SETTINGS)

    # "/" and anything unrecognised
    return PageResolution(Page.DASHBOARD if authenticated else Page.LANDING)
