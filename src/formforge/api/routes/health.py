from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    backend: str


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    return HealthResponse(status="ok", backend=request.app.state.config.llm.backend.value)
