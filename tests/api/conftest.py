import pytest
from fastapi.testclient import TestClient

from formforge.api import create_app
from formforge.config import Config, LLMConfig
from formforge.enums import BackendType


@pytest.fixture
def app():
    return create_app(Config(llm=LLMConfig(backend=BackendType.NONE)))


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
