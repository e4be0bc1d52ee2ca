"""
Check Providers - 内置健康检查

依赖、构建、测试、安全、性能五项检查。
引擎不执行真实工具，只读取项目句柄中上游采集的事实。
"""

from typing import List, Optional

from ..compatibility.models import Severity
from ..compatibility.scoring import clamp_score, severity_penalty
from ..config import AdvisorConfig, PerformanceBudgets, QualityThresholds
from ..errors import CheckExecutionError
from .models import CheckResult, CheckStatus, ProjectHandle
from .runner import CheckProvider


def _missing(check: str, fact: str) -> CheckExecutionError:
    return CheckExecutionError(f"no {fact} collected for {check} check")


class DependencyCheck(CheckProvider):
    """依赖健康检查"""

    name = "dependencies"

    async def run(self, project: ProjectHandle) -> CheckResult:
        facts = project.dependencies
        if facts is None:
            raise _missing(self.name, "dependency manifest data")

        score = clamp_score(
            100
            - 20 * len(facts.vulnerable)
            - 5 * len(facts.outdated)
            - 2 * len(facts.unused)
        )

        recommendations = [f"Upgrade vulnerable dependency {d}" for d in facts.vulnerable]
        recommendations += [f"Update {d} to the latest version" for d in facts.outdated]
        if facts.unused:
            recommendations.append(f"Remove unused dependencies: {', '.join(facts.unused)}")

        if facts.vulnerable:
            status = CheckStatus.FAIL
        elif facts.outdated or facts.unused:
            status = CheckStatus.WARNING
        else:
            status = CheckStatus.PASS

        return CheckResult(
            name=self.name,
            status=status,
            score=int(score),
            details=(
                f"{facts.total} dependencies: {len(facts.vulnerable)} vulnerable, "
                f"{len(facts.outdated)} outdated, {len(facts.unused)} unused"
            ),
            recommendations=recommendations,
        )


class BuildCheck(CheckProvider):
    """构建结果检查"""

    name = "build"

    async def run(self, project: ProjectHandle) -> CheckResult:
        facts = project.build
        if facts is None:
            raise _missing(self.name, "build outcome")

        if not facts.success:
            details = "Build failed"
            if facts.errors:
                details += ": " + "; ".join(facts.errors[:3])
            return CheckResult(
                name=self.name,
                status=CheckStatus.FAIL,
                score=0,
                details=details,
                recommendations=["Fix build errors before release"],
            )

        if facts.warnings:
            return CheckResult(
                name=self.name,
                status=CheckStatus.WARNING,
                score=100 - min(2 * facts.warnings, 30),
                details=f"Build succeeded with {facts.warnings} warnings in {facts.duration_seconds:g}s",
                recommendations=["Resolve build warnings"],
            )

        return CheckResult(
            name=self.name,
            status=CheckStatus.PASS,
            score=100,
            details=f"Build succeeded in {facts.duration_seconds:g}s",
        )


class TestCheck(CheckProvider):
    """测试结果与覆盖率检查"""

    __test__ = False

    name = "tests"

    def __init__(self, thresholds: Optional[QualityThresholds] = None):
        self.thresholds = thresholds or QualityThresholds()

    async def run(self, project: ProjectHandle) -> CheckResult:
        facts = project.tests
        if facts is None:
            raise _missing(self.name, "test outcome")

        if facts.executed == 0:
            return CheckResult(
                name=self.name,
                status=CheckStatus.WARNING,
                score=0,
                details="No tests were executed",
                recommendations=["Add unit tests for core functionality"],
            )

        pass_rate = facts.passed / facts.executed * 100
        coverage = facts.coverage if facts.coverage is not None else 100.0
        score = round(clamp_score(min(pass_rate, coverage)))

        details = f"{facts.passed}/{facts.executed} tests passed"
        if facts.coverage is not None:
            details += f", coverage {facts.coverage:g}%"

        recommendations = []
        if facts.failed:
            recommendations.append(f"Fix {facts.failed} failing tests")
        if facts.coverage is not None and facts.coverage < self.thresholds.test_coverage:
            recommendations.append(
                f"Increase test coverage to at least {self.thresholds.test_coverage:g}%"
            )

        if facts.failed:
            status = CheckStatus.FAIL
        elif recommendations:
            status = CheckStatus.WARNING
        else:
            status = CheckStatus.PASS

        return CheckResult(
            name=self.name,
            status=status,
            score=score,
            details=details,
            recommendations=recommendations,
        )


class SecurityCheck(CheckProvider):
    """安全扫描结果检查"""

    name = "security"

    BLOCKING = (Severity.HIGH, Severity.CRITICAL)

    def __init__(self, thresholds: Optional[QualityThresholds] = None):
        self.thresholds = thresholds or QualityThresholds()

    async def run(self, project: ProjectHandle) -> CheckResult:
        facts = project.security
        if facts is None:
            raise _missing(self.name, "security scan findings")

        findings = facts.findings
        score = int(clamp_score(100 - severity_penalty(f.severity for f in findings)))

        if any(f.severity in self.BLOCKING for f in findings):
            status = CheckStatus.FAIL
        elif score < self.thresholds.security:
            status = CheckStatus.WARNING
        else:
            status = CheckStatus.PASS

        if findings:
            counts = {}
            for f in findings:
                counts[f.severity.value] = counts.get(f.severity.value, 0) + 1
            details = f"{len(findings)} findings (" + ", ".join(
                f"{counts[s.value]} {s.value}" for s in Severity if s.value in counts
            ) + ")"
        else:
            details = "No security vulnerabilities found"

        return CheckResult(
            name=self.name,
            status=status,
            score=score,
            details=details,
            recommendations=[f.recommendation or f"Resolve {f.id}" for f in findings],
        )


class PerformanceCheck(CheckProvider):
    """性能指标检查"""

    name = "performance"

    FAIL_BELOW = 50
    BUDGET_PENALTY = 15

    def __init__(
        self,
        thresholds: Optional[QualityThresholds] = None,
        budgets: Optional[PerformanceBudgets] = None,
    ):
        self.thresholds = thresholds or QualityThresholds()
        self.budgets = budgets or PerformanceBudgets()

    def _exceeded_budgets(self, facts) -> List[str]:
        exceeded = []
        if facts.bundle_size_kb is not None and facts.bundle_size_kb > self.budgets.max_bundle_size_kb:
            exceeded.append(
                f"bundle size {facts.bundle_size_kb:g}KB > {self.budgets.max_bundle_size_kb:g}KB"
            )
        if (facts.build_time_seconds is not None
                and facts.build_time_seconds > self.budgets.max_build_time_seconds):
            exceeded.append(
                f"build time {facts.build_time_seconds:g}s > {self.budgets.max_build_time_seconds:g}s"
            )
        if facts.load_time_ms is not None and facts.load_time_ms > self.budgets.max_load_time_ms:
            exceeded.append(
                f"load time {facts.load_time_ms:g}ms > {self.budgets.max_load_time_ms:g}ms"
            )
        return exceeded

    async def run(self, project: ProjectHandle) -> CheckResult:
        facts = project.performance
        if facts is None:
            raise _missing(self.name, "performance metrics")

        exceeded = self._exceeded_budgets(facts)
        if facts.score is not None:
            score = round(clamp_score(facts.score))
        else:
            score = int(clamp_score(100 - self.BUDGET_PENALTY * len(exceeded)))

        if score < self.FAIL_BELOW:
            status = CheckStatus.FAIL
        elif score < self.thresholds.performance:
            status = CheckStatus.WARNING
        else:
            status = CheckStatus.PASS

        details = "Exceeded budgets: " + "; ".join(exceeded) if exceeded else "All performance budgets met"
        recommendations = []
        if facts.bundle_size_kb is not None and facts.bundle_size_kb > self.budgets.max_bundle_size_kb:
            recommendations.append("Consider code splitting for large bundles")
        if exceeded and len(recommendations) < len(exceeded):
            recommendations.append("Profile slow build and load paths")

        return CheckResult(
            name=self.name,
            status=status,
            score=score,
            details=details,
            recommendations=recommendations,
        )


def default_providers(config: Optional[AdvisorConfig] = None) -> List[CheckProvider]:
    """内置检查提供者，每次调用返回新列表"""
    config = config or AdvisorConfig()
    return [
        DependencyCheck(),
        BuildCheck(),
        TestCheck(config.thresholds),
        SecurityCheck(config.thresholds),
        PerformanceCheck(config.thresholds, config.budgets),
    ]
