"""
Compatibility Analyzer - 兼容性分析

冲突检测 -> 评分 + 建议 -> CompatibilityReport
"""

import logging
from typing import Optional, Sequence

from .builtin_rules import default_registry
from .models import CompatibilityReport
from .recommendations import generate_recommendations
from .registry import RuleRegistry
from .scoring import is_compatible, score_conflicts

logger = logging.getLogger(__name__)


class CompatibilityAnalyzer:
    """兼容性分析器"""

    def __init__(self, registry: Optional[RuleRegistry] = None):
        self.registry = registry if registry is not None else default_registry()

    def analyze(
        self,
        modules: Sequence[str],
        framework: str,
        platform: str = "web",
    ) -> CompatibilityReport:
        detection = self.registry.evaluate(modules, framework, platform)
        conflicts = detection.conflicts

        report = CompatibilityReport(
            compatible=is_compatible(conflicts),
            score=score_conflicts(conflicts),
            conflicts=conflicts,
            recommendations=generate_recommendations(conflicts, framework),
            rule_errors=[str(e) for e in detection.errors],
        )
        logger.debug(
            "compatibility analysis: %d conflicts, score %d",
            len(conflicts), report.score
        )
        return report


def analyze_compatibility(
    modules: Sequence[str],
    framework: str,
    platform: str = "web",
    registry: Optional[RuleRegistry] = None,
) -> CompatibilityReport:
    """便捷函数：使用给定（或内置）规则分析模块集合"""
    return CompatibilityAnalyzer(registry).analyze(modules, framework, platform)
