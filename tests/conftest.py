# tests/conftest.py
import io

import pytest
from fastapi.testclient import TestClient
from rich.console import Console

from storeapi.database import JsonStore, get_store
from storeapi.main import app
from storefront.pages import PageContext
from storefront.session import Session
from storesdk.client import StoreClient


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path / "data.json")


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sdk(client):
    return StoreClient(base_url="http://testserver", session=client)


@pytest.fixture
def session(tmp_path):
    return Session(tmp_path / "browser" / "session.json")


def scripted(*answers):
    """Stand-in for Prompt.ask that replays answers in order."""
    it = iter(answers)

    def ask(prompt, **kwargs):
        return next(it)
    return ask


@pytest.fixture
def make_ctx(sdk, session):
    def _make(*answers, confirm=True, news=None):
        console = Console(record=True, width=200, file=io.StringIO())
        return PageContext(
            sdk, session, console=console,
            ask=scripted(*answers),
            confirm=lambda *a, **k: confirm,
            news=news or (lambda: []),
        )
    return _make
