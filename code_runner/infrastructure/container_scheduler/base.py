"""
容器调度器接口

定义执行生命周期所需的容器操作抽象接口。
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import AsyncIterator, Dict, List, Tuple

MANAGED_LABEL = "code_runner.managed"
EXECUTION_ID_LABEL = "code_runner.execution_id"


@dataclass(frozen=True)
class ContainerConfig:
    """容器配置"""
    image: str
    name: str
    command: Tuple[str, ...]
    network_mode: str  # 如 "none", "bridge"
    memory_bytes: int
    cpu_shares: int
    labels: Dict[str, str] = field(default_factory=dict)


class LogStreamType(str, Enum):
    """日志流类型"""
    STDIN = "stdin"
    STDOUT = "stdout"
    STDERR = "stderr"
    CONSOLE = "console"  # TTY 容器的原始输出，不区分 stdout/stderr


@dataclass(frozen=True)
class LogChunk:
    """一段容器日志（未解码）"""
    stream: LogStreamType
    data: bytes


class IContainerScheduler(ABC):
    """
    容器调度器接口

    所有方法在 daemon 调用失败时抛出 ContainerError。
    """

    @abstractmethod
    async def create_container(self, config: ContainerConfig) -> str:
        """
        创建容器

        返回容器ID
        """
        pass

    @abstractmethod
    async def start_container(self, container_id: str) -> None:
        """启动容器"""
        pass

    @abstractmethod
    async def wait_container(self, container_id: str) -> int:
        """等待容器进入非运行状态，返回退出码"""
        pass

    @abstractmethod
    async def kill_container(self, container_id: str, signal: str = "SIGINT") -> None:
        """向容器发送信号"""
        pass

    @abstractmethod
    def stream_logs(self, container_id: str) -> AsyncIterator[LogChunk]:
        """按帧读取容器日志"""
        pass

    @abstractmethod
    async def remove_container(
        self,
        container_id: str,
        force: bool = True,
        remove_volumes: bool = True,
    ) -> None:
        """删除容器"""
        pass

    @abstractmethod
    async def list_managed_containers(self) -> List[str]:
        """列出带管理标签的容器ID"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """关闭 daemon 连接"""
        pass
