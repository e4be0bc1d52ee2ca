"""
Stack Advisor - 模块兼容性与项目健康评分引擎

- compatibility/: 模块集合冲突检测、评分与建议
- health/: 项目健康检查执行与汇总
"""

__version__ = "0.1.0"

from .errors import (
    AdvisorError,
    RuleEvaluationError,
    CheckExecutionError,
    CheckTimeoutError,
    StructuralValidationError,
)
from .config import AdvisorConfig, HealthCheckConfig, QualityThresholds, PerformanceBudgets
from .compatibility import (
    Severity,
    Conflict,
    CompatibilityRule,
    CompatibilityReport,
    RuleRegistry,
    CompatibilityAnalyzer,
    analyze_compatibility,
    default_registry,
)
from .health import (
    CheckStatus,
    OverallStatus,
    CheckResult,
    HealthReport,
    ProjectHandle,
    HealthCheckRunner,
    HealthAnalyzer,
    check_health,
    default_providers,
)

__all__ = [
    "AdvisorError",
    "RuleEvaluationError",
    "CheckExecutionError",
    "CheckTimeoutError",
    "StructuralValidationError",
    "AdvisorConfig",
    "HealthCheckConfig",
    "QualityThresholds",
    "PerformanceBudgets",
    "Severity",
    "Conflict",
    "CompatibilityRule",
    "CompatibilityReport",
    "RuleRegistry",
    "CompatibilityAnalyzer",
    "analyze_compatibility",
    "default_registry",
    "CheckStatus",
    "OverallStatus",
    "CheckResult",
    "HealthReport",
    "ProjectHandle",
    "HealthCheckRunner",
    "HealthAnalyzer",
    "check_health",
    "default_providers",
]
