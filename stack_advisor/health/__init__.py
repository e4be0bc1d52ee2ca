"""
Health - 项目健康检查

- Runner: 并发执行检查，保持注册顺序
- Aggregator: 整体状态、分数与汇总
- Providers: 依赖、构建、测试、安全、性能
"""

from .models import (
    CheckStatus,
    OverallStatus,
    CheckResult,
    HealthSummary,
    HealthReport,
    ProjectHandle,
    DependencyFacts,
    BuildFacts,
    TestFacts,
    SecurityFinding,
    SecurityFacts,
    PerformanceFacts,
)
from .runner import CheckProvider, FunctionCheckProvider, HealthCheckRunner
from .aggregator import summarize, determine_overall, overall_score, aggregate
from .providers import (
    DependencyCheck,
    BuildCheck,
    TestCheck,
    SecurityCheck,
    PerformanceCheck,
    default_providers,
)
from .analyzer import HealthAnalyzer, check_health

__all__ = [
    "CheckStatus",
    "OverallStatus",
    "CheckResult",
    "HealthSummary",
    "HealthReport",
    "ProjectHandle",
    "DependencyFacts",
    "BuildFacts",
    "TestFacts",
    "SecurityFinding",
    "SecurityFacts",
    "PerformanceFacts",
    "CheckProvider",
    "FunctionCheckProvider",
    "HealthCheckRunner",
    "summarize",
    "determine_overall",
    "overall_score",
    "aggregate",
    "DependencyCheck",
    "BuildCheck",
    "TestCheck",
    "SecurityCheck",
    "PerformanceCheck",
    "default_providers",
    "HealthAnalyzer",
    "check_health",
]
