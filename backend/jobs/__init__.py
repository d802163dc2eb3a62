"""PDF job runner package.

Public API::

    from backend.jobs import build_pdf
    job = build_pdf(["https://example.com/", "https://example.com/about"])
"""

from backend.jobs.runner import PdfJob, build_pdf, default_output_settings

__all__ = ["PdfJob", "build_pdf", "default_output_settings"]
