"""
Errors - 错误分类

运行期问题（规则失败、检查失败、超时）被记录进报告；
只有引擎配置错误会直接抛给调用方。
"""


class AdvisorError(Exception):
    """所有 stack_advisor 错误的基类"""


class RuleEvaluationError(AdvisorError):
    """单条兼容性规则的谓词执行失败"""

    def __init__(self, rule_name: str, cause: Exception):
        self.rule_name = rule_name
        self.cause = cause
        super().__init__(f"{rule_name}: {cause}")


class CheckExecutionError(AdvisorError):
    """单个健康检查执行失败"""


class CheckTimeoutError(CheckExecutionError):
    """健康检查超出时间预算"""

    def __init__(self, check_name: str, timeout_seconds: float):
        self.check_name = check_name
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Check timed out after {timeout_seconds:g}s")


class StructuralValidationError(AdvisorError):
    """调用方误用或配置错误（未知的严重级别、越界分数等）"""
