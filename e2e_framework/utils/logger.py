import logging
import os
from contextvars import ContextVar
from datetime import datetime
from typing import Optional

_CURRENT_TEST: ContextVar[str] = ContextVar("CURRENT_TEST", default="-")

LOGGER_NAME = "e2e_logger"


def set_current_test(name: str) -> None:
    """Author: taobo.zhou
    设置当前场景名称上下文。
    Set the scenario name shown in every log line.

        name: 当前场景名称。
    """

    _CURRENT_TEST.set(name or "-")


class _InjectTestNameFilter(logging.Filter):
    """Author: taobo.zhou
    日志过滤器，注入场景名称到记录中。
    Logger filter injecting the scenario name into log records.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "test"):
            record.test = _CURRENT_TEST.get()
        return True


def _log_file(log_dir: Optional[str] = None) -> str:
    log_dir = log_dir or os.environ.get("E2E_LOG_DIR") or os.path.join(os.getcwd(), "logs")
    os.makedirs(log_dir, exist_ok=True)
    return os.path.join(
        log_dir,
        f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    )


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(test)s | %(filename)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def get_logger() -> logging.Logger:
    """Author: taobo.zhou
    获取全局日志记录器，首次调用时只初始化控制台输出。
    Return the shared logger, wiring the console handler on first use.
    Importing the package never touches the filesystem; see enable_file_logging.
    """

    logger = logging.getLogger(LOGGER_NAME)

    if getattr(logger, "_inited", False):
        return logger

    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(_formatter())
    console_handler.addFilter(_InjectTestNameFilter())

    logger.addHandler(console_handler)

    logger.propagate = False

    logger._inited = True
    return logger


def enable_file_logging(log_dir: Optional[str] = None) -> logging.FileHandler:
    """Author: taobo.zhou
    中文：为全局日志记录器追加 DEBUG 级别的文件输出，重复调用返回同一个 handler。
    参数:
        log_dir: 日志目录；缺省时依次使用 E2E_LOG_DIR 与 ./logs。
    """

    logger = get_logger()
    handler = getattr(logger, "_file_handler", None)
    if handler is not None:
        return handler

    handler = logging.FileHandler(_log_file(log_dir), encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(_formatter())
    handler.addFilter(_InjectTestNameFilter())
    logger.addHandler(handler)

    logger._file_handler = handler
    return handler


def disable_file_logging() -> None:
    logger = get_logger()
    handler = getattr(logger, "_file_handler", None)
    if handler is None:
        return
    logger.removeHandler(handler)
    handler.close()
    logger._file_handler = None
