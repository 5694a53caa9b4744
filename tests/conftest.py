import pytest

from app.config import Settings


@pytest.fixture
def cfg() -> Settings:
    return Settings(_env_file=None, openai_api_key=None, jina_api_key=None)
