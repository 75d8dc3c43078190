from fastapi import APIRouter, Request
from fastapi.responses import Response

from ...renderers import export_bundle, export_filename, export_json
from .forms import RenderFormRequest

router = APIRouter(prefix="/export", tags=["export"])


def _download(content: str | bytes, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/json")
def export_form_json(payload: RenderFormRequest):
    form = payload.form
    return _download(export_json(form), export_filename(form, "json"), "application/json")


@router.post("/html")
def export_form_html(request: Request, payload: RenderFormRequest):
    form = payload.form
    return _download(
        request.app.state.renderer.export_html(form),
        export_filename(form, "html"),
        "text/html; charset=utf-8",
    )


@router.post("/bundle")
def export_form_bundle(request: Request, payload: RenderFormRequest):
    form = payload.form
    return _download(
        export_bundle(form, request.app.state.renderer),
        export_filename(form, "zip"),
        "application/zip",
    )
