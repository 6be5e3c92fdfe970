from contextvars import ContextVar

_ACTIVE_DRIVER: ContextVar = ContextVar("ACTIVE_DRIVER", default=None)


class DriverManager:
    """Author: taobo.zhou
    驱动登记处，保存当前场景的 WebDriver。
    Registry of the current scenario's WebDriver, local to the running context.
    """

    @classmethod
    def set_driver(cls, driver) -> None:
        _ACTIVE_DRIVER.set(driver)

    @classmethod
    def get_driver(cls):
        return _ACTIVE_DRIVER.get()

    @classmethod
    def clear(cls) -> None:
        _ACTIVE_DRIVER.set(None)
