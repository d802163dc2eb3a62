"""PDF job endpoint.

Routes
------
POST /pdf    Body: {"urls": [...], "paper_size": "A4", "orientation": "portrait"}
             → application/pdf
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel, Field, HttpUrl

from backend.assembler import OutputSettings, pdf_filename
from backend.config import settings
from backend.errors import NothingCapturedError, SurfaceError
from backend.jobs.runner import build_pdf

router = APIRouter()


class PdfRequest(BaseModel):
    urls: list[HttpUrl] = Field(..., min_length=1)
    paper_size: str = Field(default_factory=lambda: settings.default_paper_size)
    orientation: str = Field(default_factory=lambda: settings.default_orientation)


@router.post("", response_class=Response)
def pdf_endpoint(body: PdfRequest, request: Request) -> Response:
    """Capture every URL in order and return the bound PDF.

    Pages that fail are left out; their count is reported in the
    ``X-Capture-Failures`` header.  Only one job runs at a time.
    """
    try:
        output_settings = OutputSettings.from_strings(body.paper_size, body.orientation)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    urls = [str(u) for u in body.urls]
    with request.app.state.job_lock:
        try:
            job = build_pdf(
                urls,
                output_settings=output_settings,
                slot=request.app.state.surface_slot,
            )
        except NothingCapturedError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except SurfaceError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc

    # Header values must be latin-1; keep the suggested name ASCII.
    ascii_title = job.filename[: -len(".pdf")].encode("ascii", "ignore").decode()
    filename = pdf_filename(ascii_title)
    return Response(
        content=job.pdf,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Capture-Failures": str(len(job.failures)),
        },
    )
