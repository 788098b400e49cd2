"""
Report API endpoints.

These turn already-assembled report data into paginated layouts or PDFs:
1. POST /reports/layout — Paginate a generic card document (JSON draw ops)
2. POST /reports/pdf — Render a generic card document as a PDF download
3. POST /reports/skill-gap/layout — Paginate a candidate skill gap report
4. POST /reports/skill-gap/pdf — Download a candidate skill gap report PDF

Nothing is stored: every request lays the report out from scratch. Layout
and rendering are CPU-bound, so they run in the threadpool instead of on
the event loop.

Invalid geometry (zero-width cards, cards past the page edge, empty
documents) is a 422 with the engine's message as the detail.
"""

from datetime import datetime

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from app.config import settings
from app.layout import ConfigurationError, PageDecoration, ReportPaginator
from app.schemas.reports import DocumentRequest, LayoutResponse, SkillGapReport
from app.services.pdf_renderer import PDFRenderer, safe_filename
from app.services.skill_gap_report import SkillGapReportService

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.post("/layout", response_model=LayoutResponse)
async def layout_document(request: DocumentRequest):
    """Paginate a card document and return every page's draw ops."""
    pages = await _run(_paginate_document, request)
    return LayoutResponse.from_pages(pages)


@router.post("/pdf")
async def download_document_pdf(request: DocumentRequest):
    """Render a card document as a PDF."""
    def render():
        pages = _paginate_document(request)
        metrics = request.page.to_layout()
        return PDFRenderer(metrics).render(pages, title=request.title)

    pdf_bytes = await _run(render)
    filename = f"{safe_filename(request.title, 'report')}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/skill-gap/layout", response_model=LayoutResponse)
async def layout_skill_gap_report(report: SkillGapReport):
    """Paginate a skill gap report without rendering it."""
    pages = await _run(SkillGapReportService().layout, report)
    return LayoutResponse.from_pages(pages)


@router.post("/skill-gap/pdf")
async def download_skill_gap_pdf(report: SkillGapReport):
    """Download a candidate's skill gap report as a PDF.

    Filename pattern: <candidateId>_Report_<timestamp>.pdf
    """
    rendered = await _run(SkillGapReportService().render_pdf, report)
    print(f"📄 Skill gap report for candidate {report.candidate_id}: "
          f"{rendered.page_count} page(s), {len(rendered.content)} bytes")

    return Response(
        content=rendered.content,
        media_type=rendered.media_type,
        headers={"Content-Disposition": f'attachment; filename="{rendered.filename}"'},
    )


# --- Helpers ---

def _paginate_document(request: DocumentRequest):
    metrics = request.page.to_layout()
    decoration = PageDecoration(
        footer_text=settings.REPORT_FOOTER_TEXT,
        generated_at=f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}",
        font=settings.REPORT_FONT,
        bold_font=settings.REPORT_BOLD_FONT,
    )
    return ReportPaginator(metrics, decoration=decoration).paginate(request.to_layout())


async def _run(func, *args):
    """Run a layout/render call off the event loop; config errors → 422."""
    try:
        return await run_in_threadpool(func, *args)
    except ConfigurationError as e:
        print(f"❌ Report configuration error: {e}")
        raise HTTPException(status_code=422, detail=str(e))
