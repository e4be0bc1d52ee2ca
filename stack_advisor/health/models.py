"""
Health Models - 项目健康数据模型

检查结果、汇总、健康报告，以及上游采集到的项目事实
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..compatibility.models import Severity
from ..errors import StructuralValidationError


class CheckStatus(Enum):
    """单项检查状态"""
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"

    @classmethod
    def parse(cls, value: Union[str, "CheckStatus"]) -> "CheckStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise StructuralValidationError(f"unknown check status: {value!r}") from None


class OverallStatus(Enum):
    """整体健康状态"""
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class CheckResult:
    """单项健康检查结果"""
    name: str
    status: CheckStatus
    score: int
    details: str = ""
    recommendations: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.status = CheckStatus.parse(self.status)
        if isinstance(self.score, bool) or not isinstance(self.score, (int, float)):
            raise StructuralValidationError(
                f"check '{self.name}' score must be a number, got {self.score!r}"
            )
        if not 0 <= self.score <= 100:
            raise StructuralValidationError(
                f"check '{self.name}' score {self.score} outside [0, 100]"
            )

    @classmethod
    def failed(cls, name: str, details: str) -> "CheckResult":
        return cls(name=name, status=CheckStatus.FAIL, score=0, details=details)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "status": self.status.value,
            "score": self.score,
            "details": self.details,
            "recommendations": self.recommendations,
        }


@dataclass
class HealthSummary:
    """检查计数汇总"""
    total_checks: int = 0
    passed_checks: int = 0
    warning_checks: int = 0
    failed_checks: int = 0

    def to_dict(self) -> dict:
        return {
            "total_checks": self.total_checks,
            "passed_checks": self.passed_checks,
            "warning_checks": self.warning_checks,
            "failed_checks": self.failed_checks,
        }


@dataclass
class HealthReport:
    """健康报告"""
    overall: OverallStatus
    score: float
    checks: List[CheckResult]
    summary: HealthSummary

    @property
    def is_healthy(self) -> bool:
        return self.overall == OverallStatus.HEALTHY

    @property
    def is_degenerate(self) -> bool:
        """空检查集合：healthy 只是空真，调用方应单独提示"""
        return self.summary.total_checks == 0

    def to_dict(self) -> dict:
        return {
            "overall": self.overall.value,
            "score": self.score,
            "checks": [c.to_dict() for c in self.checks],
            "summary": self.summary.to_dict(),
        }


# ---------------------------------------------------------------------------
# 项目事实：由上游协作方（构建、测试、安全扫描等）产出，引擎只读取
# ---------------------------------------------------------------------------

@dataclass
class DependencyFacts:
    """依赖清单信息"""
    total: int = 0
    outdated: List[str] = field(default_factory=list)
    vulnerable: List[str] = field(default_factory=list)
    unused: List[str] = field(default_factory=list)


@dataclass
class BuildFacts:
    """构建结果"""
    success: bool
    duration_seconds: float = 0.0
    warnings: int = 0
    errors: List[str] = field(default_factory=list)


@dataclass
class TestFacts:
    """测试结果与覆盖率"""
    __test__ = False

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    coverage: Optional[float] = None

    @property
    def executed(self) -> int:
        return self.passed + self.failed


@dataclass
class SecurityFinding:
    """安全扫描发现"""
    id: str
    severity: Severity
    title: str = ""
    recommendation: str = ""

    def __post_init__(self):
        self.severity = Severity.parse(self.severity)


@dataclass
class SecurityFacts:
    """安全扫描结果"""
    findings: List[SecurityFinding] = field(default_factory=list)


@dataclass
class PerformanceFacts:
    """性能指标"""
    bundle_size_kb: Optional[float] = None
    build_time_seconds: Optional[float] = None
    load_time_ms: Optional[float] = None
    score: Optional[float] = None


@dataclass
class ProjectHandle:
    """
    项目句柄

    路径加上已采集的项目事实；检查提供者只读访问
    """
    path: Path
    dependencies: Optional[DependencyFacts] = None
    build: Optional[BuildFacts] = None
    tests: Optional[TestFacts] = None
    security: Optional[SecurityFacts] = None
    performance: Optional[PerformanceFacts] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Optional[Union[str, Path]] = None) -> "ProjectHandle":
        """
        从采集结果文档构建项目句柄

        Args:
            data: 事实文档（通常来自 YAML/JSON）
            path: 项目路径，缺省时使用文档中的 path 字段
        """
        if not isinstance(data, dict):
            raise StructuralValidationError("project facts must be a mapping")

        try:
            security = data.get("security")
            return cls(
                path=Path(path or data.get("path", ".")),
                dependencies=_section(DependencyFacts, data.get("dependencies")),
                build=_section(BuildFacts, data.get("build")),
                tests=_section(TestFacts, data.get("tests")),
                security=SecurityFacts(
                    findings=[SecurityFinding(**f) for f in security.get("findings", [])]
                ) if security is not None else None,
                performance=_section(PerformanceFacts, data.get("performance")),
                metadata=dict(data.get("metadata", {})),
            )
        except (TypeError, AttributeError) as e:
            raise StructuralValidationError(f"malformed project facts: {e}") from e


def _section(section_cls, raw: Optional[Dict[str, Any]]):
    if raw is None:
        return None
    return section_cls(**raw)
