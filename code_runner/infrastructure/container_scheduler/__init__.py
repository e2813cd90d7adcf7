"""
容器调度器包

提供基于 aiodocker 的 Docker 容器调度能力。
"""
from code_runner.infrastructure.container_scheduler.base import (
    IContainerScheduler,
    ContainerConfig,
    LogChunk,
    LogStreamType,
    MANAGED_LABEL,
    EXECUTION_ID_LABEL,
)
from code_runner.infrastructure.container_scheduler.docker_scheduler import DockerScheduler

__all__ = [
    "IContainerScheduler",
    "ContainerConfig",
    "LogChunk",
    "LogStreamType",
    "MANAGED_LABEL",
    "EXECUTION_ID_LABEL",
    "DockerScheduler",
]
