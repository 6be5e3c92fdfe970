import os
from pathlib import Path

import pytest

from e2e_framework.reporting.lifecycle import ScenarioLifecycleHook
from e2e_framework.utils.logger import enable_file_logging, get_logger

log = get_logger()

# 命令行选项 -> 覆盖键
_OVERRIDE_OPTIONS = {
    "--e2e-env": "env",
    "--e2e-browser": "browser",
    "--e2e-headless": "headless",
    "--e2e-hub": "selenium.hub",
    "--e2e-base-url": "baseUrl",
    "--e2e-screenshot-every-step": "screenshotEveryStep",
}


def pytest_addoption(parser):
    group = parser.getgroup("e2e", "remote browser scenario lifecycle")
    group.addoption("--e2e-env", action="store", default=None, help="环境名称（覆盖 ENV）")
    group.addoption("--e2e-browser", action="store", default=None, help="浏览器（覆盖 BROWSER）")
    group.addoption("--e2e-headless", action="store", default=None, help="true/false（覆盖 HEADLESS）")
    group.addoption("--e2e-hub", action="store", default=None, help="Selenium Hub 地址（覆盖 SELENIUM_HUB）")
    group.addoption("--e2e-base-url", action="store", default=None, help="被测应用地址（覆盖 APP_URL）")
    group.addoption(
        "--e2e-screenshot-every-step",
        action="store",
        default=None,
        help="true/false（覆盖 SCREENSHOT_EVERY_STEP）",
    )
    group.addoption("--e2e-config-dir", action="store", default=None, help="环境配置目录")
    group.addoption("--e2e-results-dir", action="store", default=None, help="报告输出目录")
    group.addoption("--e2e-screenshot-dir", action="store", default=None, help="截图输出目录")


def pytest_configure(config):
    # 文件日志只在测试运行时开启，import 包不写磁盘
    enable_file_logging(os.environ.get("E2E_LOG_DIR") or str(Path(config.rootpath) / "logs"))


def _overrides(config) -> dict:
    overrides = {}
    for opt, key in _OVERRIDE_OPTIONS.items():
        value = config.getoption(opt)
        if value is not None:
            overrides[key] = value
    return overrides


def _config_dir(config) -> str:
    return (
        config.getoption("--e2e-config-dir")
        or os.environ.get("E2E_CONFIG_DIR")
        or str(Path(config.rootpath) / "config")
    )


def _results_dir(config) -> str:
    # --alluredir 只在安装了 allure-pytest 时存在
    return (
        config.getoption("--e2e-results-dir")
        or config.getoption("--alluredir", None)
        or os.environ.get("ALLURE_RESULTS_DIR")
        or "allure-results"
    )


def _scenario_failed(item) -> bool:
    for when in ("setup", "call"):
        rep = getattr(item, f"rep_{when}", None)
        if rep is not None and rep.failed:
            return True
    return False


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    记录每个阶段的报告，供场景结束时判断是否失败。
    """
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


@pytest.fixture
def scenario_hook(request):
    config = request.config
    return ScenarioLifecycleHook(
        overrides=_overrides(config),
        config_dir=_config_dir(config),
        results_dir=_results_dir(config),
        screenshot_dir=config.getoption("--e2e-screenshot-dir"),
    )


@pytest.fixture
def scenario_context(request, scenario_hook):
    """Author: taobo.zhou
    打开远程浏览器并在场景结束时关闭（通过/失败/初始化失败均关闭）。
    Open the remote browser for this scenario and close it on every exit path.
    """

    node = request.node
    name = getattr(node, "_e2e_scenario_name", None) or node.name
    try:
        with scenario_hook.session(name, is_failed=lambda: _scenario_failed(node)) as ctx:
            yield ctx
    finally:
        reporter = scenario_hook.reporter
        for path in reporter.attachments if reporter else ():
            node.user_properties.append(("screenshot", path))


@pytest.fixture
def driver(scenario_context):
    return scenario_context.driver


@pytest.fixture
def step(scenario_context, scenario_hook):
    """
    用法: with step("打开计算器"): ...
    步骤结束后按 SCREENSHOT_EVERY_STEP 截图。
    """
    return scenario_hook.step


# pytest-bdd 场景钩子；未安装 pytest-bdd 时不会被调用

@pytest.hookimpl(optionalhook=True)
def pytest_bdd_before_scenario(request, feature, scenario):
    request.node._e2e_scenario_name = scenario.name
    request.getfixturevalue("scenario_context")


@pytest.hookimpl(optionalhook=True)
def pytest_bdd_after_step(request, feature, scenario, step, step_func, step_func_args):
    request.getfixturevalue("scenario_hook").after_each_step()


@pytest.hookimpl(optionalhook=True)
def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    log.error(f"[STEP] failed: {step.keyword} {step.name} -> {exception!r}")
    request.getfixturevalue("scenario_hook").after_each_step()
