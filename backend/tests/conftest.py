import pytest

from reflection.api.deps import build_repositories
from reflection.core.config import Settings
from reflection.db import Store

MEMORY_URL = "sqlite+pysqlite:///:memory:"


@pytest.fixture
def settings():
    return Settings(database_url=MEMORY_URL, in_query_batch_size=10)


@pytest.fixture
def store(settings):
    s = Store(settings.database_url)
    s.create_all()
    yield s
    s.dispose()


@pytest.fixture
def repos(store, settings):
    return build_repositories(store, settings)
