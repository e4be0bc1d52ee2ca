"""
Recommendation Generator - 建议生成
"""

from typing import List, Optional, Sequence

from .models import Conflict

ALL_COMPATIBLE_MESSAGE = "All modules are compatible"


def generate_recommendations(
    conflicts: Sequence[Conflict],
    framework: Optional[str] = None,
) -> List[str]:
    """
    根据冲突生成建议

    无冲突时返回唯一一条 "All modules are compatible"，
    否则按冲突顺序返回每条冲突的 resolution。

    Args:
        conflicts: 冲突列表
        framework: 预留给框架相关措辞，目前未使用
    """
    if not conflicts:
        return [ALL_COMPATIBLE_MESSAGE]
    return [c.resolution for c in conflicts]
