"""
Health Analyzer - 项目健康分析

执行器 -> 汇总 -> HealthReport
"""

import asyncio
import logging
from typing import Iterable, Optional

from ..config import AdvisorConfig
from .aggregator import aggregate
from .models import HealthReport, ProjectHandle
from .providers import default_providers
from .runner import CheckProvider, HealthCheckRunner

logger = logging.getLogger(__name__)


class HealthAnalyzer:
    """健康分析器"""

    def __init__(self, runner: HealthCheckRunner):
        self.runner = runner

    async def check(
        self,
        project: ProjectHandle,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> HealthReport:
        checks = await self.runner.run_suite(project, cancel_event)
        report = aggregate(checks)

        if report.is_degenerate:
            logger.warning("health suite has no registered checks")
        logger.debug(
            "health analysis: %s, score %.1f", report.overall.value, report.score
        )
        return report


async def check_health(
    project: ProjectHandle,
    providers: Optional[Iterable[CheckProvider]] = None,
    config: Optional[AdvisorConfig] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> HealthReport:
    """
    便捷函数：用给定（或内置）检查提供者生成健康报告

    Args:
        project: 项目句柄
        providers: 检查提供者，缺省为内置五项检查
        config: 配置
        cancel_event: 取消信号
    """
    config = config or AdvisorConfig()
    if providers is None:
        providers = default_providers(config)
    runner = HealthCheckRunner(providers, config.health)
    return await HealthAnalyzer(runner).check(project, cancel_event)
