"""
执行结果值对象
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict

ERROR_EXECUTION_ID = "error"


@dataclass(frozen=True)
class ExecutionResult:
    """执行结果（成功、超时或错误形态）"""
    execution_id: str
    stdout: str
    stderr: str
    exit_code: int
    duration: float
    timed_out: bool

    @classmethod
    def error(cls, message: str) -> "ExecutionResult":
        """
        构建错误形态的结果

        核心边界不抛出异常，所有失败都以普通结果返回。
        """
        return cls(
            execution_id=ERROR_EXECUTION_ID,
            stdout="",
            stderr=message,
            exit_code=-1,
            duration=0.0,
            timed_out=False,
        )

    @property
    def is_error(self) -> bool:
        return self.execution_id == ERROR_EXECUTION_ID

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
