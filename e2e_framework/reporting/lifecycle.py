"""
Scenario lifecycle hook

Current responsibilities:
- open a remote browser session before the scenario
- write environment metadata for the report
- screenshot on failure / after every step
- close the session after the scenario, on every exit path
"""

from __future__ import annotations

import os
import platform
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

from e2e_framework.core.context import ScenarioContext
from e2e_framework.core.settings import (
    SessionConfig,
    resolve_environment_name,
    resolve_screenshot_every_step,
    resolve_session_config,
)
from e2e_framework.driver.driver_factory import build_capabilities, create_remote_driver
from e2e_framework.driver.driver_manager import DriverManager
from e2e_framework.reporting.reporter import ScenarioReporter
from e2e_framework.utils.config_loader import load_config
from e2e_framework.utils.logger import get_logger, set_current_test

WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080

log = get_logger()


def build_environment_report(config: SessionConfig) -> Dict[str, str]:
    return {
        "OS": platform.system(),
        "Browser": config.browser_name,
        "Headless": str(config.headless).lower(),
        "Environment": config.environment_name,
        "BaseUrl": config.base_url,
        "SeleniumHub": config.hub_url,
    }


class ScenarioLifecycleHook:
    """Author: taobo.zhou
    场景生命周期钩子：每个场景一个实例。
    Per-scenario lifecycle hook owning one remote browser session.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
        config_dir=None,
        results_dir="allure-results",
        screenshot_dir=None,
        driver_factory: Callable = create_remote_driver,
    ):
        self._overrides = dict(overrides or {})
        self._environ = os.environ if environ is None else environ
        self._config_dir = config_dir
        self._results_dir = Path(results_dir)
        self._screenshot_dir = screenshot_dir
        self._driver_factory = driver_factory
        self.context: Optional[ScenarioContext] = None

    @property
    def driver(self):
        return self.context.driver if self.context else None

    @property
    def reporter(self) -> Optional[ScenarioReporter]:
        return self.context.reporter if self.context else None

    def set_up(self, scenario_name: str) -> ScenarioContext:
        """Author: taobo.zhou
        中文：解析配置、打开远程会话、登记驱动并写入报告环境信息。
        参数:
            scenario_name: 场景名称。
        """

        set_current_test(scenario_name)
        self.context = ScenarioContext(scenario_name)

        env = resolve_environment_name(self._overrides, self._environ)
        store = load_config(env, self._config_dir)
        cfg = resolve_session_config(env, store, self._overrides, self._environ)
        self.context.config = cfg

        capabilities = build_capabilities(cfg.browser_name, cfg.headless)
        driver = self._driver_factory(cfg.hub_url, capabilities)
        self.context.driver = driver

        driver.set_window_size(WINDOW_WIDTH, WINDOW_HEIGHT)
        driver.get(cfg.base_url)

        DriverManager.set_driver(driver)

        reporter = ScenarioReporter(driver, self._results_dir, self._screenshot_dir)
        self.context.reporter = reporter
        reporter.write_environment(build_environment_report(cfg))

        log.info(f"Starting scenario: {scenario_name}")
        log.info(
            "Config → env=%s, browser=%s, headless=%s, baseUrl=%s, hub=%s",
            cfg.environment_name,
            cfg.browser_name,
            cfg.headless,
            cfg.base_url,
            cfg.hub_url,
        )
        return self.context

    def tear_down(self) -> None:
        driver = self.driver
        if driver is not None:
            try:
                driver.quit()
            except Exception:
                log.exception("[TEARDOWN] failed to quit the browser session")
            finally:
                self.context.driver = None
                DriverManager.clear()
        log.info("Closing the browser.")

    def capture_failure(self, failed: bool) -> Optional[str]:
        if failed and self.reporter is not None:
            return self.reporter.capture_and_attach_screenshot(
                f"{self.context.name}__failure"
            )
        return None

    def after_each_step(self) -> Optional[str]:
        if resolve_screenshot_every_step(self._overrides, self._environ) and self.reporter is not None:
            return self.reporter.capture_and_attach_screenshot(
                f"{self.context.name}__step"
            )
        return None

    @contextmanager
    def step(self, name: str) -> Iterator[None]:
        """Author: taobo.zhou
        中文：包裹一个测试步骤，步骤结束后（无论成功失败）执行 after_each_step。
        参数:
            name: 步骤名称，仅用于日志。
        """

        log.info(f"[STEP] {name}")
        try:
            yield
        except Exception as e:
            log.error(f"[STEP] failed: {name} -> {e!r}")
            raise
        finally:
            self.after_each_step()

    @contextmanager
    def session(
        self,
        scenario_name: str,
        is_failed: Callable[[], bool] = lambda: False,
    ) -> Iterator[ScenarioContext]:
        """Author: taobo.zhou
        中文：保证清理的场景会话；失败截图在关闭浏览器之前完成。
        English: Scenario session with guaranteed cleanup; the failure
        screenshot is taken before the browser is quit.
        """

        try:
            yield self.set_up(scenario_name)
        except Exception:
            self.capture_failure(True)
            raise
        else:
            self.capture_failure(is_failed())
        finally:
            self.tear_down()
