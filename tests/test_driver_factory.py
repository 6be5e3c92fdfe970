import pytest

from e2e_framework.driver import driver_factory
from e2e_framework.driver.driver_factory import (
    build_capabilities,
    create_remote_driver,
    validate_hub_url,
)


def test_capabilities_lowercase_browser_and_headless_flag():
    assert build_capabilities("Chrome", True) == {"browserName": "chrome", "se:headless": True}
    assert build_capabilities("FIREFOX", False) == {"browserName": "firefox", "se:headless": False}


@pytest.mark.parametrize(
    "url",
    [
        "http://localhost:4444/wd/hub",
        "https://grid.example.test/wd/hub",
        "http://10.0.0.5:4444",
    ],
)
def test_valid_hub_urls(url):
    assert validate_hub_url(url) == url


@pytest.mark.parametrize(
    "url",
    ["", "localhost:4444/wd/hub", "ftp://grid:4444", "http://", "not a url", None],
)
def test_malformed_hub_url_raises(url):
    with pytest.raises(ValueError, match="Malformed Selenium hub URL"):
        validate_hub_url(url)


def test_create_remote_driver_passes_capabilities(monkeypatch):
    calls = []

    def fake_remote(command_executor, options):
        calls.append((command_executor, options))
        return "session"

    monkeypatch.setattr(driver_factory.webdriver, "Remote", fake_remote)

    driver = create_remote_driver(
        "http://grid:4444/wd/hub",
        build_capabilities("Edge", True),
    )

    assert driver == "session"
    (hub, options), = calls
    assert hub == "http://grid:4444/wd/hub"
    caps = options.to_capabilities()
    assert caps["browserName"] == "edge"
    assert caps["se:headless"] is True


def test_malformed_url_never_opens_a_session(monkeypatch):
    def fake_remote(**kwargs):
        raise AssertionError("Remote must not be called")

    monkeypatch.setattr(driver_factory.webdriver, "Remote", fake_remote)

    with pytest.raises(ValueError):
        create_remote_driver("localhost", build_capabilities("chrome", False))
