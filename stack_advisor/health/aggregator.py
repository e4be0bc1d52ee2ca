"""
Health Aggregator - 健康结果汇总

整体状态严格按 fail > warning > healthy 的优先级推导，每次调用重新计算
"""

from typing import Sequence

from .models import CheckResult, CheckStatus, HealthReport, HealthSummary, OverallStatus


def summarize(checks: Sequence[CheckResult]) -> HealthSummary:
    """按状态计数"""
    return HealthSummary(
        total_checks=len(checks),
        passed_checks=sum(1 for c in checks if c.status == CheckStatus.PASS),
        warning_checks=sum(1 for c in checks if c.status == CheckStatus.WARNING),
        failed_checks=sum(1 for c in checks if c.status == CheckStatus.FAIL),
    )


def determine_overall(checks: Sequence[CheckResult]) -> OverallStatus:
    """计算整体状态；空列表为 healthy"""
    statuses = {c.status for c in checks}
    if CheckStatus.FAIL in statuses:
        return OverallStatus.CRITICAL
    if CheckStatus.WARNING in statuses:
        return OverallStatus.WARNING
    return OverallStatus.HEALTHY


def overall_score(checks: Sequence[CheckResult]) -> float:
    """各项分数的算术平均；空列表为 0"""
    if not checks:
        return 0
    return sum(c.score for c in checks) / len(checks)


def aggregate(checks: Sequence[CheckResult]) -> HealthReport:
    checks = list(checks)
    return HealthReport(
        overall=determine_overall(checks),
        score=overall_score(checks),
        checks=checks,
        summary=summarize(checks),
    )
