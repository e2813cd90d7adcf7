"""
测试辅助工具

FakeScheduler 在内存中模拟 Docker daemon 的容器状态。
"""
import asyncio
from typing import AsyncIterator, Dict, List, Optional

from code_runner.infrastructure.container_scheduler.base import (
    IContainerScheduler,
    ContainerConfig,
    LogChunk,
    LogStreamType,
)


def stdout_chunk(text: str) -> LogChunk:
    return LogChunk(stream=LogStreamType.STDOUT, data=text.encode("utf-8"))


def stderr_chunk(text: str) -> LogChunk:
    return LogChunk(stream=LogStreamType.STDERR, data=text.encode("utf-8"))


class FakeScheduler(IContainerScheduler):
    """
    内存中的容器调度器

    - containers: 当前存在于 "daemon" 上的容器
    - calls: 按顺序记录的调用 (方法名, 容器ID或名称)
    - max_alive: 任意时刻同时存在的最大容器数
    - wait_forever: 模拟永不结束的代码（等待被超时打断）
    """

    def __init__(
        self,
        exit_code: int = 0,
        wait_delay: float = 0.0,
        wait_forever: bool = False,
        log_chunks: Optional[List[LogChunk]] = None,
    ):
        self.exit_code = exit_code
        self.wait_delay = wait_delay
        self.wait_forever = wait_forever
        self.log_chunks = log_chunks or []

        self.create_error: Optional[Exception] = None
        self.start_error: Optional[Exception] = None
        self.wait_error: Optional[Exception] = None
        self.kill_error: Optional[Exception] = None
        self.logs_error: Optional[Exception] = None
        self.remove_error: Optional[Exception] = None
        self.list_error: Optional[Exception] = None

        self.containers: Dict[str, ContainerConfig] = {}
        self.configs: List[ContainerConfig] = []
        self.calls: List[tuple] = []
        self.max_alive = 0
        self.closed = False
        self._counter = 0

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    async def create_container(self, config: ContainerConfig) -> str:
        self.calls.append(("create", config.name))
        if self.create_error:
            raise self.create_error
        self._counter += 1
        container_id = f"container-{self._counter}"
        self.containers[container_id] = config
        self.configs.append(config)
        self.max_alive = max(self.max_alive, len(self.containers))
        return container_id

    async def start_container(self, container_id: str) -> None:
        self.calls.append(("start", container_id))
        if self.start_error:
            raise self.start_error

    async def wait_container(self, container_id: str) -> int:
        self.calls.append(("wait", container_id))
        if self.wait_forever:
            await asyncio.Event().wait()
        if self.wait_delay:
            await asyncio.sleep(self.wait_delay)
        if self.wait_error:
            raise self.wait_error
        return self.exit_code

    async def kill_container(self, container_id: str, signal: str = "SIGINT") -> None:
        self.calls.append(("kill", container_id, signal))
        if self.kill_error:
            raise self.kill_error

    async def stream_logs(self, container_id: str) -> AsyncIterator[LogChunk]:
        self.calls.append(("logs", container_id))
        for chunk in self.log_chunks:
            yield chunk
        if self.logs_error:
            raise self.logs_error

    async def remove_container(
        self,
        container_id: str,
        force: bool = True,
        remove_volumes: bool = True,
    ) -> None:
        self.calls.append(("remove", container_id, force, remove_volumes))
        if self.remove_error:
            raise self.remove_error
        self.containers.pop(container_id, None)

    async def list_managed_containers(self) -> List[str]:
        self.calls.append(("list",))
        if self.list_error:
            raise self.list_error
        return list(self.containers)

    async def close(self) -> None:
        self.closed = True
