import pytest
from selenium.common.exceptions import WebDriverException

_ENV_VARS = (
    "ENV",
    "BROWSER",
    "HEADLESS",
    "SELENIUM_HUB",
    "APP_URL",
    "SCREENSHOT_EVERY_STEP",
    "E2E_CONFIG_DIR",
    "ALLURE_RESULTS_DIR",
)


class FakeDriver:
    """Author: taobo.zhou
    记录调用顺序的假 WebDriver。
    Fake WebDriver recording every call in order.
    """

    def __init__(self, hub_url=None, capabilities=None):
        self.hub_url = hub_url
        self.capabilities = capabilities
        self.calls = []
        self.current_url = None
        self.quit_error = None
        self.get_error = None
        self.screenshot_error = None

    def set_window_size(self, width, height):
        self.calls.append(("set_window_size", width, height))

    def get(self, url):
        self.calls.append(("get", url))
        if self.get_error:
            raise self.get_error
        self.current_url = url

    def save_screenshot(self, path):
        self.calls.append(("save_screenshot", path))
        if self.screenshot_error:
            raise self.screenshot_error
        with open(path, "wb") as f:
            f.write(b"\x89PNG\r\n")
        return True

    def quit(self):
        self.calls.append(("quit",))
        if self.quit_error:
            raise self.quit_error

    def names(self):
        return [c[0] for c in self.calls]


class FakeDriverFactory:
    def __init__(self):
        self.drivers = []
        self.configure = None

    def __call__(self, hub_url, capabilities):
        driver = FakeDriver(hub_url, capabilities)
        if self.configure:
            self.configure(driver)
        self.drivers.append(driver)
        return driver

    @property
    def last(self):
        return self.drivers[-1]


@pytest.fixture(autouse=True)
def clean_environ(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_driver_factory():
    return FakeDriverFactory()


@pytest.fixture
def config_dir(tmp_path):
    d = tmp_path / "config"
    d.mkdir()
    (d / "dev.yaml").write_text(
        "BROWSER: Chrome\nHEADLESS: false\nAPP_URL: http://localhost:8080/calculator\n",
        encoding="utf-8",
    )
    (d / "qa.yaml").write_text(
        "BROWSER: firefox\nHEADLESS: false\nAPP_URL: https://qa.example.test/calculator\n",
        encoding="utf-8",
    )
    return d


@pytest.fixture
def webdriver_gone():
    return WebDriverException("invalid session id")
