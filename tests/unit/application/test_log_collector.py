"""
日志收集器单元测试
"""
import pytest

from code_runner.application.services.log_collector import LogCollector
from code_runner.infrastructure.container_scheduler.base import LogChunk, LogStreamType
from code_runner.shared.errors.infrastructure import ContainerError
from tests.helpers import FakeScheduler, stdout_chunk, stderr_chunk


class TestLogCollector:
    """日志收集器测试"""

    @pytest.mark.asyncio
    async def test_split_stdout_and_stderr(self):
        """测试按流类型拼接输出"""
        scheduler = FakeScheduler(log_chunks=[
            stdout_chunk("hello "),
            stderr_chunk("warn\n"),
            stdout_chunk("world\n"),
        ])

        stdout, stderr = await LogCollector(scheduler).collect("container-1")

        assert stdout == "hello world\n"
        assert stderr == "warn\n"

    @pytest.mark.asyncio
    async def test_console_goes_to_stdout_and_stdin_is_ignored(self):
        """测试 console 输出并入 stdout，stdin 帧被忽略"""
        scheduler = FakeScheduler(log_chunks=[
            LogChunk(stream=LogStreamType.STDIN, data=b"typed"),
            LogChunk(stream=LogStreamType.CONSOLE, data=b"tty out"),
        ])

        stdout, stderr = await LogCollector(scheduler).collect("container-1")

        assert stdout == "tty out"
        assert stderr == ""

    @pytest.mark.asyncio
    async def test_undecodable_chunks_are_dropped(self):
        """测试无法按 UTF-8 解码的片段被丢弃"""
        scheduler = FakeScheduler(log_chunks=[
            stdout_chunk("a"),
            LogChunk(stream=LogStreamType.STDOUT, data=b"\xff\xfe"),
            stdout_chunk("b"),
        ])

        stdout, _ = await LogCollector(scheduler).collect("container-1")

        assert stdout == "ab"

    @pytest.mark.asyncio
    async def test_stream_error_keeps_collected_output(self):
        """测试读取出错时返回已收集的内容"""
        scheduler = FakeScheduler(log_chunks=[stdout_chunk("partial")])
        scheduler.logs_error = ContainerError("Failed to read container logs: gone")

        stdout, stderr = await LogCollector(scheduler).collect("container-1")

        assert stdout == "partial"
        assert stderr == ""

    @pytest.mark.asyncio
    async def test_no_logs(self, scheduler):
        """测试没有任何输出"""
        assert await LogCollector(scheduler).collect("container-1") == ("", "")
