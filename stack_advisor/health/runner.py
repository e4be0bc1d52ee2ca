"""
Health Check Runner - 健康检查执行器

并发执行所有已注册的检查提供者，按注册顺序收集结果。
单个提供者失败、超时或被取消时合成 fail 结果，不向调用方传播。
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Iterable, List, Optional

from ..config import HealthCheckConfig
from ..errors import CheckTimeoutError, StructuralValidationError
from .models import CheckResult, ProjectHandle

logger = logging.getLogger(__name__)

CANCELLED_DETAILS = "Check cancelled"


class CheckProvider(ABC):
    """健康检查提供者：run(project) -> CheckResult"""

    name: str = ""

    # 为 None 时使用执行器配置的超时
    timeout_seconds: Optional[float] = None

    @abstractmethod
    async def run(self, project: ProjectHandle) -> CheckResult:
        ...


class FunctionCheckProvider(CheckProvider):
    """把异步函数包装为检查提供者"""

    def __init__(
        self,
        name: str,
        check_fn: Callable[[ProjectHandle], Awaitable[CheckResult]],
        timeout_seconds: Optional[float] = None,
    ):
        self.name = name
        self.check_fn = check_fn
        self.timeout_seconds = timeout_seconds

    async def run(self, project: ProjectHandle) -> CheckResult:
        return await self.check_fn(project)


class HealthCheckRunner:
    """
    健康检查执行器

    提供者列表在每次调用方构造时确定，执行期间只读
    """

    def __init__(
        self,
        providers: Iterable[CheckProvider] = (),
        config: Optional[HealthCheckConfig] = None,
    ):
        self.config = config or HealthCheckConfig()
        # 构造后可能被修改过，这里再校验一次
        self.config.validate()
        self._providers: List[CheckProvider] = []
        for provider in providers:
            self.register(provider)

    def register(self, provider: CheckProvider) -> None:
        """注册检查提供者"""
        if not getattr(provider, "name", None) or not callable(getattr(provider, "run", None)):
            raise StructuralValidationError(f"invalid check provider: {provider!r}")
        if any(p.name == provider.name for p in self._providers):
            raise StructuralValidationError(f"duplicate check provider: {provider.name}")
        timeout = provider.timeout_seconds
        if timeout is not None and timeout <= 0:
            raise StructuralValidationError(f"check '{provider.name}' timeout must be positive")

        self._providers.append(provider)
        logger.debug("registered check provider %s", provider.name)

    def register_check(
        self,
        name: str,
        check_fn: Callable[[ProjectHandle], Awaitable[CheckResult]],
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """注册一个异步检查函数"""
        self.register(FunctionCheckProvider(name, check_fn, timeout_seconds))

    @property
    def providers(self) -> List[CheckProvider]:
        return list(self._providers)

    def _timeout_for(self, provider: CheckProvider) -> float:
        if provider.timeout_seconds is not None:
            return provider.timeout_seconds
        return self.config.timeout_for(provider.name)

    async def _run_one(self, provider: CheckProvider, project: ProjectHandle) -> CheckResult:
        timeout = self._timeout_for(provider)
        try:
            result = await asyncio.wait_for(provider.run(project), timeout=timeout)
        except StructuralValidationError:
            raise
        except asyncio.TimeoutError:
            error = CheckTimeoutError(provider.name, timeout)
            logger.warning("check %s timed out after %ss", provider.name, timeout)
            return CheckResult.failed(provider.name, str(error))
        except Exception as e:
            logger.warning("check %s failed: %s", provider.name, e)
            return CheckResult.failed(provider.name, f"Check failed: {e}")

        if not isinstance(result, CheckResult):
            raise StructuralValidationError(
                f"check '{provider.name}' returned {type(result).__name__}, expected CheckResult"
            )
        return result

    async def run_suite(
        self,
        project: ProjectHandle,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[CheckResult]:
        """
        执行所有检查

        Args:
            project: 项目句柄
            cancel_event: 取消信号；置位后放弃未完成的检查

        Returns:
            按注册顺序排列的检查结果，长度恒等于提供者数量
        """
        providers = tuple(self._providers)
        tasks = [
            asyncio.ensure_future(self._run_one(provider, project))
            for provider in providers
        ]
        cancel_waiter = (
            asyncio.ensure_future(cancel_event.wait()) if cancel_event is not None else None
        )

        pending = set(tasks)
        cancelled = False
        try:
            while pending:
                waiting = pending if cancel_waiter is None else pending | {cancel_waiter}
                done, _ = await asyncio.wait(waiting, return_when=asyncio.FIRST_COMPLETED)

                if cancel_waiter is not None and cancel_waiter in done:
                    cancelled = True
                    break

                pending -= done
                errors = [task.exception() for task in done]
                errors = [e for e in errors if e is not None]
                if errors:
                    raise errors[0]
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        results: List[CheckResult] = []
        for provider, task in zip(providers, tasks):
            if task.cancelled():
                results.append(CheckResult.failed(provider.name, CANCELLED_DETAILS))
                continue
            # 在取消信号到达的同一轮完成的任务也可能带有结构错误
            exc = task.exception()
            if exc is not None:
                raise exc
            results.append(task.result())

        if cancelled:
            logger.warning(
                "health suite cancelled, %d checks abandoned",
                sum(1 for t in tasks if t.cancelled())
            )
        logger.debug("health suite finished with %d results", len(results))
        return results
