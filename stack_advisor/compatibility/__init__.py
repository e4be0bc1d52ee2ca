"""
Compatibility - 模块兼容性分析

- Registry: 规则注册与冲突检测
- Scoring: 严重级别评分
- Recommendations: 建议生成
"""

from .models import Severity, Conflict, CompatibilityRule, CompatibilityReport
from .registry import RuleRegistry, DetectionResult
from .scoring import SEVERITY_WEIGHTS, score_conflicts, is_compatible
from .recommendations import ALL_COMPATIBLE_MESSAGE, generate_recommendations
from .builtin_rules import (
    all_of,
    exclusive_pairs,
    framework_restricted,
    platform_restricted,
    builtin_rules,
    default_registry,
)
from .analyzer import CompatibilityAnalyzer, analyze_compatibility

__all__ = [
    "Severity",
    "Conflict",
    "CompatibilityRule",
    "CompatibilityReport",
    "RuleRegistry",
    "DetectionResult",
    "SEVERITY_WEIGHTS",
    "score_conflicts",
    "is_compatible",
    "ALL_COMPATIBLE_MESSAGE",
    "generate_recommendations",
    "all_of",
    "exclusive_pairs",
    "framework_restricted",
    "platform_restricted",
    "builtin_rules",
    "default_registry",
    "CompatibilityAnalyzer",
    "analyze_compatibility",
]
