"""
健康检查执行器测试
"""

import asyncio
import gc
from pathlib import Path

import pytest

from stack_advisor.config import HealthCheckConfig
from stack_advisor.errors import CheckExecutionError, StructuralValidationError
from stack_advisor.health import (
    CheckProvider,
    CheckResult,
    CheckStatus,
    FunctionCheckProvider,
    HealthAnalyzer,
    HealthCheckRunner,
    OverallStatus,
    ProjectHandle,
)
from stack_advisor.health.runner import CANCELLED_DETAILS


def sleeping_check(name, delay, score=100, status=CheckStatus.PASS):
    async def check(project):
        await asyncio.sleep(delay)
        return CheckResult(name=name, status=status, score=score, details=f"slept {delay}")
    return check


@pytest.fixture
def project():
    return ProjectHandle(path=Path("/tmp/project"))


class TestHealthCheckRunner:
    """健康检查执行器测试"""

    @pytest.mark.asyncio
    async def test_results_in_registration_order(self, project):
        """测试结果按注册顺序而非完成顺序排列"""
        runner = HealthCheckRunner()
        runner.register_check("slow", sleeping_check("slow", 0.05))
        runner.register_check("medium", sleeping_check("medium", 0.02))
        runner.register_check("fast", sleeping_check("fast", 0))

        results = await runner.run_suite(project)
        assert [r.name for r in results] == ["slow", "medium", "fast"]

    @pytest.mark.asyncio
    async def test_providers_run_concurrently(self, project):
        """测试提供者并发执行"""
        started = []
        release = asyncio.Event()

        def gated(name):
            async def check(project):
                started.append(name)
                await release.wait()
                return CheckResult(name=name, status=CheckStatus.PASS, score=100)
            return check

        runner = HealthCheckRunner()
        runner.register_check("a", gated("a"))
        runner.register_check("b", gated("b"))

        task = asyncio.ensure_future(runner.run_suite(project))
        await asyncio.sleep(0.01)
        assert sorted(started) == ["a", "b"]

        release.set()
        results = await task
        assert [r.status for r in results] == [CheckStatus.PASS, CheckStatus.PASS]

    @pytest.mark.asyncio
    async def test_failing_provider_is_isolated(self, project):
        """测试提供者抛异常时合成 fail 结果"""
        async def broken(project):
            raise CheckExecutionError("npm audit crashed")

        runner = HealthCheckRunner()
        runner.register_check("dependencies", sleeping_check("dependencies", 0))
        runner.register_check("security", broken)
        runner.register_check("build", sleeping_check("build", 0))

        results = await runner.run_suite(project)

        assert [r.name for r in results] == ["dependencies", "security", "build"]
        failed = results[1]
        assert failed.status == CheckStatus.FAIL
        assert failed.score == 0
        assert "npm audit crashed" in failed.details
        assert results[0].status == CheckStatus.PASS

    @pytest.mark.asyncio
    async def test_failure_makes_overall_critical(self, project):
        """测试任一提供者失败时整体状态为 critical"""
        async def broken(project):
            raise RuntimeError("unexpected")

        runner = HealthCheckRunner()
        for name in ("dependencies", "build", "tests", "performance"):
            runner.register_check(name, sleeping_check(name, 0))
        runner.register_check("security", broken)

        report = await HealthAnalyzer(runner).check(project)

        assert report.overall == OverallStatus.CRITICAL
        assert report.summary.failed_checks == 1
        assert report.summary.passed_checks == 4

    @pytest.mark.asyncio
    async def test_timeout(self, project):
        """测试超时的提供者"""
        runner = HealthCheckRunner(config=HealthCheckConfig(timeout_seconds=0.05))
        runner.register_check("hung", sleeping_check("hung", 10))
        runner.register_check("quick", sleeping_check("quick", 0))

        results = await runner.run_suite(project)

        assert results[0].name == "hung"
        assert results[0].status == CheckStatus.FAIL
        assert results[0].score == 0
        assert "timed out" in results[0].details
        assert results[1].status == CheckStatus.PASS

    @pytest.mark.asyncio
    async def test_per_check_timeout_override(self, project):
        """测试单项超时覆盖"""
        config = HealthCheckConfig(timeout_seconds=0.05, check_timeouts={"build": 1.0})
        runner = HealthCheckRunner(config=config)
        runner.register_check("build", sleeping_check("build", 0.1))
        runner.register_check("tests", sleeping_check("tests", 0.1))

        results = await runner.run_suite(project)
        assert [r.status for r in results] == [CheckStatus.PASS, CheckStatus.FAIL]

    @pytest.mark.asyncio
    async def test_cancellation_marks_unfinished_checks(self, project):
        """测试取消后未完成的检查标记为 fail"""
        cancel = asyncio.Event()
        runner = HealthCheckRunner()
        runner.register_check("fast", sleeping_check("fast", 0))
        runner.register_check("slow", sleeping_check("slow", 10))

        task = asyncio.ensure_future(HealthAnalyzer(runner).check(project, cancel))
        await asyncio.sleep(0.05)
        cancel.set()
        report = await asyncio.wait_for(task, timeout=2)

        assert [c.name for c in report.checks] == ["fast", "slow"]
        assert report.checks[0].status == CheckStatus.PASS
        assert report.checks[1].status == CheckStatus.FAIL
        assert report.checks[1].details == CANCELLED_DETAILS
        assert report.summary.total_checks == 2
        assert report.overall == OverallStatus.CRITICAL

    @pytest.mark.asyncio
    async def test_invalid_result_fails_fast(self, project):
        """测试返回越界分数时直接抛出结构错误"""
        async def bad_score(project):
            return CheckResult(name="bad", status=CheckStatus.PASS, score=120)

        runner = HealthCheckRunner()
        runner.register_check("bad", bad_score)
        runner.register_check("slow", sleeping_check("slow", 10))

        with pytest.raises(StructuralValidationError):
            await asyncio.wait_for(runner.run_suite(project), timeout=2)

    @pytest.mark.asyncio
    async def test_simultaneous_structural_errors_all_retrieved(self, project):
        """测试同一批完成的多个结构错误都被读取，不留下未取回的任务异常"""
        release = asyncio.Event()

        def gated_bad_score(name):
            async def check(project):
                await release.wait()
                return CheckResult(name=name, status=CheckStatus.PASS, score=-1)
            return check

        runner = HealthCheckRunner()
        runner.register_check("first", gated_bad_score("first"))
        runner.register_check("second", gated_bad_score("second"))

        loop = asyncio.get_running_loop()
        unhandled = []
        loop.set_exception_handler(lambda loop, context: unhandled.append(context))
        try:
            suite = asyncio.ensure_future(runner.run_suite(project))
            await asyncio.sleep(0)
            release.set()
            with pytest.raises(StructuralValidationError) as excinfo:
                await suite
            del excinfo, suite
            gc.collect()
        finally:
            loop.set_exception_handler(None)

        assert unhandled == []

    @pytest.mark.asyncio
    async def test_non_check_result_fails_fast(self, project):
        async def wrong_type(project):
            return {"name": "x", "status": "pass", "score": 100}

        runner = HealthCheckRunner()
        runner.register_check("wrong", wrong_type)

        with pytest.raises(StructuralValidationError):
            await runner.run_suite(project)

    @pytest.mark.asyncio
    async def test_empty_suite(self, project):
        report = await HealthAnalyzer(HealthCheckRunner()).check(project)
        assert report.checks == []
        assert report.overall == OverallStatus.HEALTHY
        assert report.score == 0
        assert report.is_degenerate

    def test_duplicate_provider_rejected(self):
        runner = HealthCheckRunner()
        runner.register_check("build", sleeping_check("build", 0))
        with pytest.raises(StructuralValidationError):
            runner.register_check("build", sleeping_check("build", 0))

    def test_invalid_provider_rejected(self):
        with pytest.raises(StructuralValidationError):
            HealthCheckRunner().register(object())

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(StructuralValidationError):
            HealthCheckRunner().register(FunctionCheckProvider("x", sleeping_check("x", 0), 0))

    @pytest.mark.parametrize("kwargs", [
        {"timeout_seconds": 0},
        {"timeout_seconds": -1},
        {"check_timeouts": {"build": -1}},
        {"check_timeouts": {"build": 0}},
    ])
    def test_non_positive_config_timeout_rejected(self, kwargs):
        """测试直接构造的健康检查配置拒绝非正超时"""
        with pytest.raises(StructuralValidationError):
            HealthCheckRunner(config=HealthCheckConfig(**kwargs))

    def test_config_mutated_after_construction_rejected(self):
        config = HealthCheckConfig(timeout_seconds=5)
        config.timeout_seconds = -5
        with pytest.raises(StructuralValidationError):
            HealthCheckRunner(config=config)

    @pytest.mark.asyncio
    async def test_class_based_provider(self, project):
        """测试继承 CheckProvider 的提供者"""
        class StaticCheck(CheckProvider):
            name = "static"

            async def run(self, project):
                return CheckResult(name=self.name, status="warning", score=70, details=str(project.path))

        results = await HealthCheckRunner([StaticCheck()]).run_suite(project)
        assert results[0].status == CheckStatus.WARNING
        assert results[0].details == str(Path("/tmp/project"))
