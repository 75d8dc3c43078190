import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from ...consts import ERROR_INTERNAL, ERROR_PROMPT_REQUIRED, ERROR_SHARE_UNAVAILABLE
from ...errors import EditError, MissingPromptError
from ...schema import Form
from ...state import apply_edit

logger = logging.getLogger(__name__)

router = APIRouter(tags=["forms"])


class GenerateFormRequest(BaseModel):
    prompt: Any = None


class GenerateFormResponse(BaseModel):
    success: bool
    form: dict | None = None
    error: str | None = None


class EditFormRequest(BaseModel):
    form: Form
    operation: str
    args: dict[str, Any] = {}


class EditFormResponse(BaseModel):
    success: bool
    form: dict | None = None
    notice: str | None = None
    changed: bool = False
    error: str | None = None


class RenderFormRequest(BaseModel):
    form: Form


def _error(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=GenerateFormResponse(success=False, error=error).model_dump(exclude_none=True),
    )


@router.post("/generate-form", response_model=GenerateFormResponse)
async def generate_form(request: Request, body: GenerateFormRequest | None = None):
    orchestrator = request.app.state.orchestrator
    prompt = body.prompt if body is not None else None

    try:
        result = await run_in_threadpool(orchestrator.handle_generate, prompt)
    except MissingPromptError:
        return _error(400, ERROR_PROMPT_REQUIRED)
    except Exception as e:
        logger.error(f"API error: {e}", exc_info=True)
        return _error(500, ERROR_INTERNAL)

    return JSONResponse(
        content=GenerateFormResponse(success=True, form=result.form.to_dict()).model_dump(
            exclude_none=True
        ),
        headers={"X-Form-Source": result.source.value},
    )


@router.post("/edit-form", response_model=EditFormResponse)
def edit_form(payload: EditFormRequest):
    try:
        result = apply_edit(payload.form, payload.operation, payload.args)
    except EditError as e:
        return JSONResponse(
            status_code=400,
            content=EditFormResponse(success=False, error=str(e)).model_dump(exclude_none=True),
        )

    return EditFormResponse(
        success=True,
        form=result.form.to_dict(),
        notice=result.notice,
        changed=result.changed,
    )


@router.post("/preview", response_class=HTMLResponse)
def preview_form(request: Request, payload: RenderFormRequest):
    return HTMLResponse(request.app.state.renderer.render_preview(payload.form))


@router.post("/editor", response_class=HTMLResponse)
def editor_form(request: Request, payload: RenderFormRequest):
    return HTMLResponse(request.app.state.renderer.render_editor(payload.form))


@router.post("/share")
def share_form():
    return JSONResponse(
        status_code=501,
        content={"success": False, "error": ERROR_SHARE_UNAVAILABLE},
    )
