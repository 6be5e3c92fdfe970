"""Scenario setting resolution.

每个设置按 显式覆盖 > 环境变量 > 配置文件/默认值 的顺序取值。
Every setting is resolved as explicit override > environment variable >
stored config value / literal default.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple, Optional

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_HUB_URL = "http://localhost:4444/wd/hub"
DEFAULT_SCREENSHOT_EVERY_STEP = "false"


class Setting(NamedTuple):
    override_key: str
    env_var: str
    config_key: Optional[str] = None


ENVIRONMENT = Setting("env", "ENV")
BROWSER = Setting("browser", "BROWSER", "BROWSER")
HEADLESS = Setting("headless", "HEADLESS", "HEADLESS")
SELENIUM_HUB = Setting("selenium.hub", "SELENIUM_HUB", "SELENIUM_HUB")
BASE_URL = Setting("baseUrl", "APP_URL", "APP_URL")
SCREENSHOT_EVERY_STEP = Setting("screenshotEveryStep", "SCREENSHOT_EVERY_STEP")


@dataclass(frozen=True)
class SessionConfig:
    environment_name: str
    browser_name: str
    headless: bool
    hub_url: str
    base_url: str


def resolve(override: Any, env_value: Any, default: Any) -> Any:
    """Return the first value that is not None: override, env_value, default."""
    if override is not None:
        return override
    if env_value is not None:
        return env_value
    return default


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == "true"


def _lookup(setting: Setting, overrides, environ, default=None):
    return resolve(
        (overrides or {}).get(setting.override_key),
        (environ or {}).get(setting.env_var),
        default,
    )


def _required(setting: Setting, value):
    if value is None:
        raise ValueError(
            f"'{setting.override_key}' is not configured: pass the override, "
            f"set {setting.env_var}, or add {setting.config_key} to the environment config"
        )
    return value


def resolve_environment_name(
    overrides: Optional[Mapping[str, Any]],
    environ: Optional[Mapping[str, str]],
) -> str:
    return str(_lookup(ENVIRONMENT, overrides, environ, DEFAULT_ENVIRONMENT))


def resolve_session_config(
    environment_name: str,
    store,
    overrides: Optional[Mapping[str, Any]],
    environ: Optional[Mapping[str, str]],
) -> SessionConfig:
    """Author: taobo.zhou
    中文：根据覆盖值、环境变量与配置文件解析本场景的会话配置。
    参数:
        environment_name: 已解析的环境名称。
        store: 该环境的 ConfigStore。
        overrides: 显式覆盖值（pytest 命令行选项）。
        environ: 环境变量映射。
    """

    browser = _lookup(BROWSER, overrides, environ, store.get(BROWSER.config_key))
    headless = _lookup(HEADLESS, overrides, environ, store.get(HEADLESS.config_key))
    hub_url = _lookup(
        SELENIUM_HUB,
        overrides,
        environ,
        resolve(None, store.get(SELENIUM_HUB.config_key), DEFAULT_HUB_URL),
    )
    base_url = _lookup(BASE_URL, overrides, environ, store.get(BASE_URL.config_key))

    return SessionConfig(
        environment_name=environment_name,
        browser_name=str(_required(BROWSER, browser)),
        headless=parse_bool(headless),
        hub_url=str(hub_url),
        base_url=str(_required(BASE_URL, base_url)),
    )


def resolve_screenshot_every_step(
    overrides: Optional[Mapping[str, Any]],
    environ: Optional[Mapping[str, str]],
) -> bool:
    return parse_bool(
        _lookup(SCREENSHOT_EVERY_STEP, overrides, environ, DEFAULT_SCREENSHOT_EVERY_STEP)
    )
