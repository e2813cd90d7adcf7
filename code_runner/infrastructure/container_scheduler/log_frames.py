"""
Docker 日志帧解析

非 TTY 容器的日志流是多路复用的：每帧 8 字节头部
（1 字节流类型、3 字节填充、4 字节大端负载长度），后接负载。
TTY 容器的日志是原始字节流。
"""
import asyncio
import struct
from typing import AsyncIterator, Dict

from code_runner.infrastructure.container_scheduler.base import LogChunk, LogStreamType
from code_runner.shared.errors.infrastructure import ContainerError

FRAME_HEADER = struct.Struct(">BxxxL")

_STREAM_TYPES: Dict[int, LogStreamType] = {
    0: LogStreamType.STDIN,
    1: LogStreamType.STDOUT,
    2: LogStreamType.STDERR,
}


async def read_log_frames(content: asyncio.StreamReader, tty: bool = False) -> AsyncIterator[LogChunk]:
    """
    逐帧读取日志

    Args:
        content: 响应体读取器（需支持 readexactly / read）
        tty: 容器是否启用 TTY

    Yields:
        LogChunk

    Raises:
        ContainerError: 帧负载不完整
    """
    if tty:
        while True:
            data = await content.read(64 * 1024)
            if not data:
                return
            yield LogChunk(stream=LogStreamType.CONSOLE, data=data)

    while True:
        try:
            header = await content.readexactly(FRAME_HEADER.size)
        except asyncio.IncompleteReadError as e:
            if e.partial:
                raise ContainerError(
                    f"Log stream ended inside a frame header ({len(e.partial)} bytes)"
                ) from e
            return

        stream_type, length = FRAME_HEADER.unpack(header)
        try:
            payload = await content.readexactly(length) if length else b""
        except asyncio.IncompleteReadError as e:
            raise ContainerError(
                f"Log stream ended inside a frame payload ({len(e.partial)}/{length} bytes)"
            ) from e

        yield LogChunk(
            stream=_STREAM_TYPES.get(stream_type, LogStreamType.CONSOLE),
            data=payload,
        )
