"""报告输出：环境信息与截图。

Reporting sink: Allure-style environment.properties plus screenshot files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from e2e_framework.utils.logger import get_logger
from e2e_framework.utils.screenshot import take_screenshot

ENVIRONMENT_FILE = "environment.properties"

log = get_logger()


def _escape(text, is_key: bool = False) -> str:
    out = (
        str(text)
        .replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    if is_key:
        out = out.replace("=", "\\=").replace(":", "\\:").replace(" ", "\\ ")
    return out


class ScenarioReporter:
    """Author: taobo.zhou
    场景报告输出，写入环境信息并保存截图。
    Scenario reporting sink writing environment metadata and screenshots.
    """

    def __init__(self, driver, results_dir, screenshot_dir=None):
        self._driver = driver
        self.results_dir = Path(results_dir)
        self.screenshot_dir = Path(screenshot_dir) if screenshot_dir else self.results_dir / "screenshots"
        self.attachments: List[str] = []

    def write_environment(self, environment: Dict[str, str]) -> Path:
        """Author: taobo.zhou
        中文：写入 environment.properties（Allure 可直接读取）。
        参数:
            environment: 报告键到字符串值的映射。
        """

        self.results_dir.mkdir(parents=True, exist_ok=True)
        path = self.results_dir / ENVIRONMENT_FILE
        lines = [f"{_escape(k, is_key=True)}={_escape(v)}" for k, v in environment.items()]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        log.debug(f"[REPORT] environment written: {path}")
        return path

    def capture_and_attach_screenshot(self, name: str = "screenshot") -> Optional[str]:
        path = take_screenshot(self._driver, str(self.screenshot_dir), prefix=name)
        if path:
            self.attachments.append(path)
            log.info(f"[SCREENSHOT] saved: {path}")
        return path
