import logging
import os

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .routes import exports, forms, health

logger = logging.getLogger(__name__)


def create_app(config_obj=None) -> FastAPI:
    from ..config import Config
    from ..consts import CONFIG_FILE_DEFAULT, ERROR_PROMPT_REQUIRED
    from ..orchestrator import GenerationOrchestrator
    from ..renderers import FormRenderer

    if config_obj is None:
        config_file = os.environ.get("CONFIG_FILE", CONFIG_FILE_DEFAULT)
        config_obj = Config.load_or_default(config_file)

    app = FastAPI(title="FormForge API")

    app.state.config = config_obj
    app.state.orchestrator = GenerationOrchestrator.from_config(config_obj)
    app.state.renderer = FormRenderer()

    api_router = APIRouter(prefix="/api")
    api_router.include_router(forms.router)
    api_router.include_router(exports.router)
    api_router.include_router(health.router)
    app.include_router(api_router)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        if request.url.path.endswith("/generate-form"):
            error = ERROR_PROMPT_REQUIRED
        else:
            errors = exc.errors()
            detail = errors[0].get("msg", "") if errors else ""
            error = f"Invalid request body: {detail}" if detail else "Invalid request body"
        return JSONResponse(status_code=400, content={"success": False, "error": error})

    return app
