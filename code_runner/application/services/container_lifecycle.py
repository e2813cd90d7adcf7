"""
容器生命周期控制器

为一次执行请求创建、启动、限时等待、中断、收集日志并删除一个容器。
"""
import asyncio
import time
import uuid
from typing import Optional, Tuple

from code_runner.application.services.log_collector import LogCollector
from code_runner.domain.services.output_truncator import truncate_output
from code_runner.domain.value_objects.execution_request import ExecutionRequest
from code_runner.domain.value_objects.execution_result import ExecutionResult
from code_runner.domain.value_objects.language_profile import resolve_profile
from code_runner.infrastructure.config.settings import Settings
from code_runner.infrastructure.container_scheduler.base import (
    IContainerScheduler,
    ContainerConfig,
    EXECUTION_ID_LABEL,
)
from code_runner.infrastructure.logging import get_logger
from code_runner.shared.errors.infrastructure import ContainerError

logger = get_logger(__name__)

CONTAINER_NAME_PREFIX = "code_exec_"
TIMEOUT_SIGNAL = "SIGINT"


class ContainerLifecycleController:
    """
    容器生命周期控制器

    run() 不抛出异常：失败以错误形态的 ExecutionResult 返回。
    容器一旦启动，无论执行成功、等待出错还是超时，都会收集日志并删除容器；
    日志和删除失败只记录日志，不会覆盖已经得到的执行结果。
    """

    def __init__(
        self,
        scheduler: IContainerScheduler,
        settings: Settings,
        log_collector: Optional[LogCollector] = None,
    ):
        self._scheduler = scheduler
        self._settings = settings
        self._log_collector = log_collector or LogCollector(scheduler)

    def build_container_config(self, request: ExecutionRequest, execution_id: str) -> ContainerConfig:
        """根据语言配置和服务配置构建容器配置"""
        profile = resolve_profile(request.language)
        return ContainerConfig(
            image=profile.image,
            name=f"{CONTAINER_NAME_PREFIX}{execution_id}",
            command=profile.command(request.code),
            network_mode=self._settings.docker_network,
            memory_bytes=self._settings.memory_limit_bytes,
            cpu_shares=self._settings.docker_cpu_shares,
            labels={EXECUTION_ID_LABEL: execution_id},
        )

    async def run(self, request: ExecutionRequest) -> ExecutionResult:
        execution_id = str(uuid.uuid4())
        log = logger.bind(execution_id=execution_id, language=request.language.value)
        timeout = request.timeout or self._settings.default_timeout

        if request.stdin:
            log.debug("stdin is not forwarded to the container", stdin_length=len(request.stdin))

        config = self.build_container_config(request, execution_id)

        try:
            container_id = await self._scheduler.create_container(config)
        except ContainerError as e:
            log.error("Container creation failed", error=e.message)
            return ExecutionResult.error(e.message)

        try:
            await self._scheduler.start_container(container_id)
        except ContainerError as e:
            log.error("Container start failed", container_id=container_id, error=e.message)
            await self._remove(container_id)
            return ExecutionResult.error(e.message)

        try:
            started = time.perf_counter()
            exit_code, timed_out = await self._wait_or_interrupt(container_id, timeout)
            duration = time.perf_counter() - started

            stdout, stderr = await self._log_collector.collect(container_id)
            max_output = self._settings.max_output_size
            stdout = truncate_output(stdout, max_output)
            stderr = truncate_output(stderr, max_output)
        finally:
            await self._remove(container_id)

        log.info(
            "Execution finished",
            container_id=container_id,
            exit_code=exit_code,
            timed_out=timed_out,
            duration=f"{duration:.3f}s",
        )
        return ExecutionResult(
            execution_id=execution_id,
            stdout=stdout,
            stderr=stderr,
            exit_code=exit_code,
            duration=duration,
            timed_out=timed_out,
        )

    async def _wait_or_interrupt(self, container_id: str, timeout: float) -> Tuple[int, bool]:
        """
        等待容器结束，超时则发送中断信号

        Returns:
            (exit_code, timed_out)
        """
        try:
            exit_code = await asyncio.wait_for(
                self._scheduler.wait_container(container_id),
                timeout=timeout,
            )
            return exit_code, False
        except asyncio.TimeoutError:
            logger.warning("Container execution timeout, interrupting", container_id=container_id, timeout=timeout)
            try:
                await self._scheduler.kill_container(container_id, signal=TIMEOUT_SIGNAL)
            except ContainerError as e:
                logger.warning("Failed to interrupt container", container_id=container_id, error=e.message)
            return -1, True
        except ContainerError as e:
            logger.error("Error waiting for container", container_id=container_id, error=e.message)
            return -1, False

    async def _remove(self, container_id: str) -> None:
        try:
            await self._scheduler.remove_container(container_id, force=True, remove_volumes=True)
        except ContainerError as e:
            logger.warning("Failed to remove container", container_id=container_id, error=e.message)
