"""
Rule Registry - 规则注册表与冲突检测

规则按注册顺序求值；单条规则失败不会中断整次检测。
注册必须在并发 detect 之前完成（先写后只读）。
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from ..errors import RuleEvaluationError, StructuralValidationError
from .models import CompatibilityRule, Conflict, ModuleSet, normalize_modules

logger = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    """一次检测的结果"""
    conflicts: List[Conflict] = field(default_factory=list)
    errors: List[RuleEvaluationError] = field(default_factory=list)


class RuleRegistry:
    """
    兼容性规则注册表

    每次调用方显式构造，不做全局单例
    """

    def __init__(self, rules: Iterable[CompatibilityRule] = ()):
        self._rules: List[CompatibilityRule] = []
        for rule in rules:
            self.register(rule)

    def register(self, rule: CompatibilityRule) -> None:
        """追加一条规则"""
        if not isinstance(rule, CompatibilityRule):
            raise StructuralValidationError(f"not a CompatibilityRule: {rule!r}")
        if any(r.name == rule.name for r in self._rules):
            raise StructuralValidationError(f"duplicate rule name: {rule.name}")
        self._rules.append(rule)
        logger.debug("registered rule %s", rule.name)

    @property
    def rules(self) -> List[CompatibilityRule]:
        return list(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def evaluate(
        self,
        modules: Sequence[str],
        framework: str,
        platform: str,
    ) -> DetectionResult:
        """
        对模块集合求值所有规则

        Args:
            modules: 模块集合
            framework: 目标框架
            platform: 目标平台

        Returns:
            按规则注册顺序排列的冲突，以及被隔离的规则错误
        """
        module_set: ModuleSet = normalize_modules(modules)
        result = DetectionResult()

        for rule in tuple(self._rules):
            try:
                matched = rule.matches(module_set, framework, platform)
            except Exception as e:
                error = RuleEvaluationError(rule.name, e)
                logger.warning("rule evaluation failed, skipping: %s", error)
                result.errors.append(error)
                continue

            if matched:
                result.conflicts.append(rule.conflict)

        return result

    def detect(
        self,
        modules: Sequence[str],
        framework: str,
        platform: str,
    ) -> List[Conflict]:
        """检测冲突"""
        return self.evaluate(modules, framework, platform).conflicts
