"""
Docker 容器调度器

使用 aiodocker 实现一次性执行容器的创建、启动、等待、信号、日志读取和删除。
"""
import json
from typing import Any, AsyncIterator, Dict, List, Optional

import aiohttp
from aiodocker import Docker
from aiodocker.exceptions import DockerError

from code_runner.infrastructure.container_scheduler.base import (
    IContainerScheduler,
    ContainerConfig,
    LogChunk,
    MANAGED_LABEL,
)
from code_runner.infrastructure.container_scheduler.log_frames import read_log_frames
from code_runner.infrastructure.logging import get_logger
from code_runner.shared.errors.infrastructure import ContainerError

logger = get_logger(__name__)

DAEMON_ERRORS = (DockerError, aiohttp.ClientError, OSError)


class DockerScheduler(IContainerScheduler):
    """
    Docker 容器调度器

    通过 Docker socket 连接 Docker daemon。实例由执行 Actor 独占持有。
    """

    def __init__(self, docker_url: str = "unix:///var/run/docker.sock"):
        """
        初始化 Docker 调度器

        Args:
            docker_url: Docker daemon 连接URL
                - unix:///var/run/docker.sock (Unix socket)
                - tcp://localhost:2375 (TCP)
        """
        self._docker_url = docker_url
        self._docker: Optional[Docker] = None
        self._initialized = False

    async def _ensure_docker(self) -> Docker:
        """确保 Docker 客户端已初始化"""
        if not self._initialized:
            self._docker = Docker(url=self._docker_url)
            self._initialized = True
        return self._docker

    async def close(self) -> None:
        """关闭 Docker 连接"""
        if self._docker:
            await self._docker.close()
            self._docker = None
            self._initialized = False

    @staticmethod
    def build_container_config(config: ContainerConfig) -> Dict[str, Any]:
        """
        构建 Docker Engine API 容器配置

        - MemorySwap 等于 Memory：不允许使用额外的 swap 绕过内存限制
        - AutoRemove 关闭：删除由调用方显式完成
        """
        return {
            "Image": config.image,
            "Cmd": list(config.command),
            "Labels": {MANAGED_LABEL: "true", **config.labels},
            "Tty": False,
            "OpenStdin": False,
            "AttachStdout": True,
            "AttachStderr": True,
            "HostConfig": {
                "NetworkMode": config.network_mode,
                "Memory": config.memory_bytes,
                "MemorySwap": config.memory_bytes,
                "CpuShares": config.cpu_shares,
                "AutoRemove": False,
            },
        }

    async def create_container(self, config: ContainerConfig) -> str:
        """创建 Docker 容器"""
        docker = await self._ensure_docker()
        try:
            container = await docker.containers.create(
                self.build_container_config(config),
                name=config.name,
            )
        except DAEMON_ERRORS as e:
            logger.error("Failed to create container", name=config.name, image=config.image, error=str(e))
            raise ContainerError(f"Failed to create container: {e}", original_error=e) from e

        logger.info("Created container", container_id=container.id, name=config.name, image=config.image)
        return container.id

    async def start_container(self, container_id: str) -> None:
        """启动容器"""
        docker = await self._ensure_docker()
        try:
            container = docker.containers.container(container_id)
            await container.start()
        except DAEMON_ERRORS as e:
            logger.error("Failed to start container", container_id=container_id, error=str(e))
            raise ContainerError(f"Failed to start container: {e}", original_error=e) from e
        logger.info("Started container", container_id=container_id)

    async def wait_container(self, container_id: str) -> int:
        """
        等待容器进入非运行状态

        Returns:
            容器退出码

        Raises:
            ContainerError: 等待失败或 daemon 未返回状态码
        """
        docker = await self._ensure_docker()
        try:
            container = docker.containers.container(container_id)
            result = await container.wait(condition="not-running")
        except DAEMON_ERRORS as e:
            raise ContainerError(f"Failed to wait for container: {e}", original_error=e) from e

        status_code = result.get("StatusCode") if isinstance(result, dict) else None
        if status_code is None:
            raise ContainerError("Container wait ended without a status code")
        return int(status_code)

    async def kill_container(self, container_id: str, signal: str = "SIGINT") -> None:
        """向容器发送信号"""
        docker = await self._ensure_docker()
        try:
            container = docker.containers.container(container_id)
            await container.kill(signal=signal)
        except DAEMON_ERRORS as e:
            raise ContainerError(f"Failed to signal container: {e}", original_error=e) from e
        logger.info("Signalled container", container_id=container_id, signal=signal)

    async def stream_logs(self, container_id: str) -> AsyncIterator[LogChunk]:
        """
        读取容器全部日志（不跟随）

        直接读取 /containers/{id}/logs 的响应体并按帧拆分，保留每帧的流类型。
        """
        docker = await self._ensure_docker()
        params = {
            "stdout": "1",
            "stderr": "1",
            "follow": "0",
            "timestamps": "0",
            "tail": "all",
        }
        try:
            info = await docker.containers.container(container_id).show()
            tty = bool(info.get("Config", {}).get("Tty", False))
            async with docker._query(
                f"containers/{container_id}/logs",
                method="GET",
                params=params,
            ) as response:
                async for chunk in read_log_frames(response.content, tty=tty):
                    yield chunk
        except DAEMON_ERRORS as e:
            raise ContainerError(f"Failed to read container logs: {e}", original_error=e) from e

    async def remove_container(
        self,
        container_id: str,
        force: bool = True,
        remove_volumes: bool = True,
    ) -> None:
        """删除容器（包括匿名卷）"""
        docker = await self._ensure_docker()
        try:
            container = docker.containers.container(container_id)
            await container.delete(force=force, v=remove_volumes)
        except DAEMON_ERRORS as e:
            raise ContainerError(f"Failed to remove container: {e}", original_error=e) from e
        logger.debug("Removed container", container_id=container_id)

    async def list_managed_containers(self) -> List[str]:
        """列出带 code_runner.managed=true 标签的容器（包括已停止的）"""
        docker = await self._ensure_docker()
        filters = json.dumps({"label": [f"{MANAGED_LABEL}=true"]})
        try:
            containers = await docker.containers.list(all=True, filters=filters)
        except DAEMON_ERRORS as e:
            raise ContainerError(f"Failed to list containers: {e}", original_error=e) from e
        return [container.id for container in containers]

