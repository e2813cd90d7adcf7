"""
日志收集器

把容器的多路复用日志拼接为 stdout / stderr 两个字符串。
"""
from typing import List, Optional, Tuple

from code_runner.infrastructure.container_scheduler.base import IContainerScheduler, LogStreamType
from code_runner.infrastructure.logging import get_logger
from code_runner.shared.errors.infrastructure import ContainerError

logger = get_logger(__name__)


def _decode(data: bytes) -> Optional[str]:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


class LogCollector:
    """
    日志收集器

    - stdout 与 TTY console 输出合并到 stdout
    - 无法按 UTF-8 解码的片段直接丢弃
    - 读取出错时记录日志并返回已收集的内容
    """

    def __init__(self, scheduler: IContainerScheduler):
        self._scheduler = scheduler

    async def collect(self, container_id: str) -> Tuple[str, str]:
        stdout: List[str] = []
        stderr: List[str] = []
        dropped = 0

        try:
            async for chunk in self._scheduler.stream_logs(container_id):
                if chunk.stream is LogStreamType.STDIN:
                    continue
                text = _decode(chunk.data)
                if text is None:
                    dropped += 1
                    continue
                if chunk.stream is LogStreamType.STDERR:
                    stderr.append(text)
                else:
                    stdout.append(text)
        except ContainerError as e:
            logger.warning("Error reading logs", container_id=container_id, error=e.message)

        if dropped:
            logger.debug("Dropped undecodable log chunks", container_id=container_id, count=dropped)
        return "".join(stdout), "".join(stderr)
