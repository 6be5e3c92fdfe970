class ScenarioContext:
    """Author: taobo.zhou
    中文：场景上下文数据对象，保存场景级依赖。
    English: Scenario context data object storing scenario-level dependencies.
    """

    def __init__(self, name, config=None, driver=None, reporter=None):
        """Author: taobo.zhou
        中文：初始化场景上下文数据。
        参数:
            name: 场景名称。
            config: 解析后的 SessionConfig。
            driver: 远程 WebDriver 实例。
            reporter: AllureReporter 实例。
        """

        self.name = name
        self.config = config
        self.driver = driver
        self.reporter = reporter

    def __repr__(self):
        return f"ScenarioContext(name={self.name!r}, config={self.config!r})"
