"""Link discovery endpoint.

Routes
------
POST /links    Body: {"url": "https://..."}    → grouped links
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, HttpUrl

from backend.links.fetcher import collect_links

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class LinksRequest(BaseModel):
    url: HttpUrl


class LinkOut(BaseModel):
    url: str
    display_text: str
    same_origin: bool


class LinkGroupOut(BaseModel):
    group_id: str
    group_name: str
    links: list[LinkOut]


class LinksResponse(BaseModel):
    url: str
    groups: list[LinkGroupOut]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=LinksResponse)
def links_endpoint(body: LinksRequest) -> dict[str, Any]:
    """Fetch the page at ``url`` and return its links grouped by context."""
    url_str = str(body.url)
    try:
        groups = collect_links(url_str)
    except Exception as exc:
        raise HTTPException(
            status_code=502, detail=f"Link extraction failed: {exc}"
        ) from exc
    return {"url": url_str, "groups": [g.to_dict() for g in groups]}
