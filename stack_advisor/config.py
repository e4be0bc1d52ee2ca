"""
Config - 配置

健康检查超时、质量阈值和性能预算。
严重级别权重与平均分算法是固定常量，不在此配置。
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import StructuralValidationError


# 允许以映射形式给出的配置键，其余键一律按数值解析
MAPPING_KEYS = frozenset({"check_timeouts"})


@dataclass
class HealthCheckConfig:
    """健康检查配置"""
    timeout_seconds: float = 30.0
    check_timeouts: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """校验超时配置；类型错误或非正数抛出 StructuralValidationError"""
        if isinstance(self.timeout_seconds, bool) or not isinstance(self.timeout_seconds, (int, float)):
            raise StructuralValidationError(
                f"health.timeout_seconds must be a number, got {self.timeout_seconds!r}"
            )
        if self.check_timeouts is None:
            self.check_timeouts = {}
        if not isinstance(self.check_timeouts, dict):
            raise StructuralValidationError("health.check_timeouts must be a mapping")
        try:
            self.check_timeouts = {str(k): float(v) for k, v in self.check_timeouts.items()}
        except (TypeError, ValueError) as e:
            raise StructuralValidationError(f"invalid health.check_timeouts: {e}") from e

        timeouts = [self.timeout_seconds, *self.check_timeouts.values()]
        if any(t <= 0 for t in timeouts):
            raise StructuralValidationError("timeouts must be positive")

    def timeout_for(self, name: str) -> float:
        return self.check_timeouts.get(name, self.timeout_seconds)


@dataclass
class QualityThresholds:
    """质量门禁阈值"""
    overall_score: float = 75.0
    test_coverage: float = 80.0
    security: float = 90.0
    performance: float = 75.0


@dataclass
class PerformanceBudgets:
    """性能预算"""
    max_bundle_size_kb: float = 1500.0
    max_build_time_seconds: float = 120.0
    max_load_time_ms: float = 3000.0


@dataclass
class AdvisorConfig:
    """顶层配置"""
    health: HealthCheckConfig = field(default_factory=HealthCheckConfig)
    thresholds: QualityThresholds = field(default_factory=QualityThresholds)
    budgets: PerformanceBudgets = field(default_factory=PerformanceBudgets)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AdvisorConfig":
        """
        从字典构建配置

        未知键或类型错误的值会抛出 StructuralValidationError
        """
        data = data or {}
        if not isinstance(data, dict):
            raise StructuralValidationError("config root must be a mapping")

        unknown = set(data) - {"health", "thresholds", "budgets"}
        if unknown:
            raise StructuralValidationError(f"unknown config sections: {sorted(unknown)}")

        return cls(
            health=_build_section(HealthCheckConfig, data.get("health"), "health"),
            thresholds=_build_section(QualityThresholds, data.get("thresholds"), "thresholds"),
            budgets=_build_section(PerformanceBudgets, data.get("budgets"), "budgets"),
        )

    @classmethod
    def load(cls, path: Optional[Union[str, Path]]) -> "AdvisorConfig":
        """从 YAML 文件加载配置，文件不存在时返回默认值"""
        if path is None:
            return cls()
        path = Path(path)
        if not path.exists():
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise StructuralValidationError(f"invalid config file {path}: {e}") from e

        return cls.from_dict(data)


def _build_section(section_cls, raw: Any, name: str):
    if raw is None:
        return section_cls()
    if not isinstance(raw, dict):
        raise StructuralValidationError(f"config section '{name}' must be a mapping")

    allowed = {f.name for f in fields(section_cls)}
    unknown = set(raw) - allowed
    if unknown:
        raise StructuralValidationError(f"unknown keys in '{name}': {sorted(unknown)}")

    try:
        values = {
            k: (v if k in MAPPING_KEYS else float(v))
            for k, v in raw.items()
        }
    except (TypeError, ValueError) as e:
        raise StructuralValidationError(f"invalid value in '{name}': {e}") from e

    return section_cls(**values)
