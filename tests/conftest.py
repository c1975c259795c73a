"""Pytest configuration and fixtures for settings-pages tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from settings_pages import MediaAttachment, MediaLibrary, MemoryBackend, SettingsPages
from settings_pages.api import create_access_token, create_app
from settings_pages.config import Settings

TEST_SECRET = "test-secret-key"


@pytest.fixture
def media():
    """Media library with one image (7) and one PDF (9)."""
    return MediaLibrary(
        [
            MediaAttachment(
                id=7,
                url="https://cdn.example.com/uploads/logo.png",
                mime_type="image/png",
                width=300,
                height=120,
                alt="Site logo",
                title="Logo",
                filesize=2048,
            ),
            MediaAttachment(
                id=9,
                url="https://cdn.example.com/uploads/terms.pdf",
                mime_type="application/pdf",
                title="Terms",
            ),
        ]
    )


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def settings_pages(backend, media):
    """Container with a general page, a single-checkbox page and a restricted page."""
    pages = SettingsPages(backend=backend, media=media)

    pages.register_page("general", title="General", capability="manage_options")
    pages.add_field("general", "text", "site_name", label="Site name", required=True)
    pages.add_field("general", "textarea", "tagline", label="Tagline", rows=3)
    pages.add_field(
        "general",
        "select",
        "color_scheme",
        label="Color scheme",
        default="light",
        options={"light": "Light", "dark": "Dark"},
    )
    pages.add_field("general", "checkbox", "enabled", label="Enabled", default=False)
    pages.add_field("general", "image", "logo", label="Logo")

    pages.register_page("p1", title="Page one")
    pages.add_field("p1", "checkbox", "flag", label="Flag", default=False)

    pages.register_page("network", title="Network", capability="manage_network")
    pages.add_field("network", "text", "domain", label="Domain")

    return pages


@pytest.fixture
def settings(tmp_path):
    return Settings(
        secret_key=TEST_SECRET,
        storage_backend="memory",
        api_prefix="/pos/v1",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def app(settings_pages, settings):
    return create_app(settings_pages=settings_pages, settings=settings)


@pytest.fixture
async def client(app):
    """Unauthenticated test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_token(*capabilities: str, subject: str = "tester") -> str:
    return create_access_token(subject, capabilities, TEST_SECRET, name=subject)


@pytest.fixture
async def admin_client(client):
    """Client authenticated with the manage_options capability."""
    client.headers["Authorization"] = f"Bearer {make_token('manage_options')}"
    yield client
