import os
import re
from datetime import datetime

from selenium.common.exceptions import WebDriverException

from e2e_framework.utils.logger import get_logger

log = get_logger()


def safe_name(s: str) -> str:
    # 用于文件名：替换非法字符
    return re.sub(r"[^A-Za-z0-9_.=-]+", "_", s or "").strip("_") or "scenario"


def take_screenshot(
    driver,
    folder: str,
    prefix: str = "scenario",
    stable: bool = False,
) -> str | None:
    """Author: taobo.zhou
    中文：保存截图并返回文件路径；任何截图失败都只记录日志并返回 None。
    参数:
        driver: WebDriver 实例。
        folder: 截图输出目录。
        prefix: 文件名前缀（会被转换为安全文件名）。
        stable: 是否使用固定文件名。
    """

    prefix = safe_name(prefix)

    if stable:
        filename = f"{prefix}.png"
    else:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        filename = f"{prefix}_{ts}_{os.getpid()}.png"
    path = os.path.join(folder, filename)

    try:
        os.makedirs(folder, exist_ok=True)
        saved = driver.save_screenshot(path)
    except WebDriverException as e:
        log.warning(f"[SCREENSHOT] failed: {e.__class__.__name__}: {e.msg}")
        return None
    except Exception as e:
        # hub 断连、目录不可写等，截图只做尽力而为
        log.warning(f"[SCREENSHOT] failed: {e!r}")
        return None

    if saved is False:
        log.warning(f"[SCREENSHOT] could not write: {path}")
        return None
    return path
