"""
Severity Scorer - 严重级别评分

从 100 开始按冲突严重级别扣分，结果下限为 0。
只与严重级别的多重集合有关，与冲突顺序无关。
"""

from typing import Dict, Iterable

from .models import Conflict, Severity

MAX_SCORE = 100

# 固定常量；如需按框架配置权重，应从这里扩展
SEVERITY_WEIGHTS: Dict[Severity, int] = {
    Severity.CRITICAL: 30,
    Severity.HIGH: 20,
    Severity.MEDIUM: 10,
    Severity.LOW: 5,
}


def clamp_score(value: float) -> float:
    return max(0, min(MAX_SCORE, value))


def severity_penalty(severities: Iterable[Severity]) -> int:
    return sum(SEVERITY_WEIGHTS[Severity.parse(s)] for s in severities)


def score_conflicts(conflicts: Iterable[Conflict]) -> int:
    """计算兼容性分数 [0, 100]"""
    return int(clamp_score(MAX_SCORE - severity_penalty(c.severity for c in conflicts)))


def is_compatible(conflicts: Iterable[Conflict]) -> bool:
    """没有 critical 冲突即视为兼容"""
    return all(c.severity != Severity.CRITICAL for c in conflicts)
