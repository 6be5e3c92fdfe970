from urllib.parse import urlparse

from selenium import webdriver
from selenium.webdriver.common.options import ArgOptions

HEADLESS_CAPABILITY = "se:headless"


def build_capabilities(browser: str, headless: bool) -> dict:
    """Author: taobo.zhou
    中文：构建远程会话能力描述。
    参数:
        browser: 浏览器名称，转换为小写。
        headless: 是否无头模式，放入 se:headless。
    """

    return {
        "browserName": browser.lower(),
        HEADLESS_CAPABILITY: bool(headless),
    }


def validate_hub_url(url: str) -> str:
    parsed = urlparse(url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Malformed Selenium hub URL: {url!r}")
    return url


def build_options(capabilities: dict) -> ArgOptions:
    options = ArgOptions()
    for name, value in capabilities.items():
        options.set_capability(name, value)
    return options


def create_remote_driver(hub_url: str, capabilities: dict):
    """Author: taobo.zhou
    中文：连接 Selenium Hub 并创建远程浏览器会话。
    参数:
        hub_url: Hub 地址，格式错误时抛出 ValueError。
        capabilities: build_capabilities 返回的能力字典。
    """

    validate_hub_url(hub_url)
    return webdriver.Remote(
        command_executor=hub_url,
        options=build_options(capabilities),
    )
