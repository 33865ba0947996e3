"""
API Router for HTML Pages

Contains:
    - GET / - Submission form page
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from src.api.dependencies import get_templates

router = APIRouter(tags=["pages"])


@router.get(
    "/",
    response_class=HTMLResponse,
    summary="Submission form",
    description="Render the empty submission form.",
)
async def form_page(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
):
    return templates.TemplateResponse(
        request,
        "form.html",
        {"title": "Face Swap Form", "errors": [], "form_data": {}},
    )
