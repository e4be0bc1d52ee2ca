"""
Compatibility Models - 兼容性数据模型

模块集合、冲突描述、兼容性规则与报告
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Sequence, Tuple, Union

from ..errors import StructuralValidationError


class Severity(Enum):
    """冲突严重级别（low < medium < high < critical）"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def parse(cls, value: Union[str, "Severity"]) -> "Severity":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise StructuralValidationError(f"unknown severity: {value!r}") from None


ModuleSet = Tuple[str, ...]

# (modules, framework, platform) -> bool
RulePredicate = Callable[[ModuleSet, str, str], bool]


def normalize_modules(modules: Sequence[str]) -> ModuleSet:
    """校验并冻结模块集合，保留调用方给出的顺序"""
    if isinstance(modules, str):
        raise StructuralValidationError("module set must be a sequence, not a string")

    result = tuple(modules)
    for module in result:
        if not isinstance(module, str) or not module:
            raise StructuralValidationError(f"invalid module identifier: {module!r}")
    if len(set(result)) != len(result):
        duplicates = sorted({m for m in result if result.count(m) > 1})
        raise StructuralValidationError(f"duplicate modules: {', '.join(duplicates)}")
    return result


@dataclass(frozen=True)
class Conflict:
    """检测到的模块冲突"""
    type: str
    severity: Severity
    description: str
    affected: ModuleSet
    resolution: str

    def __post_init__(self):
        object.__setattr__(self, "severity", Severity.parse(self.severity))
        object.__setattr__(self, "affected", tuple(self.affected))

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "severity": self.severity.value,
            "description": self.description,
            "affected": list(self.affected),
            "resolution": self.resolution,
        }


@dataclass(frozen=True)
class CompatibilityRule:
    """兼容性规则：谓词匹配时产出 conflict"""
    name: str
    predicate: RulePredicate
    conflict: Conflict

    def __post_init__(self):
        if not self.name:
            raise StructuralValidationError("rule name must not be empty")
        if not callable(self.predicate):
            raise StructuralValidationError(f"rule '{self.name}' predicate is not callable")
        if not isinstance(self.conflict, Conflict):
            raise StructuralValidationError(f"rule '{self.name}' has no Conflict descriptor")

    def matches(self, modules: ModuleSet, framework: str, platform: str) -> bool:
        return bool(self.predicate(modules, framework, platform))


@dataclass
class CompatibilityReport:
    """兼容性报告"""
    compatible: bool
    score: int
    conflicts: List[Conflict] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    rule_errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "compatible": self.compatible,
            "score": self.score,
            "conflicts": [c.to_dict() for c in self.conflicts],
            "recommendations": self.recommendations,
            "rule_errors": self.rule_errors,
        }
