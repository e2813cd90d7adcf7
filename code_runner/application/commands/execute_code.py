"""
执行代码命令

仅用于跨越执行 Actor 边界的内部信封，不对外暴露。
"""
import asyncio
from dataclasses import dataclass, field

from code_runner.domain.value_objects.execution_request import ExecutionRequest
from code_runner.domain.value_objects.execution_result import ExecutionResult


@dataclass
class ExecuteCodeCommand:
    """
    执行代码命令

    reply 是一次性回复通道：最多写入一次，最多读取一次。
    """
    payload: ExecutionRequest
    reply: "asyncio.Future[ExecutionResult]" = field(
        default_factory=lambda: asyncio.get_running_loop().create_future()
    )

    def respond(self, result: ExecutionResult) -> bool:
        """
        写入回复

        Returns:
            调用方仍在等待时返回 True；调用方已离开（Future 已取消）时返回 False
        """
        if self.reply.done():
            return False
        self.reply.set_result(result)
        return True
