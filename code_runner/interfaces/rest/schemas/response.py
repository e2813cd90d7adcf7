"""
REST API 响应模式

定义 FastAPI 的响应 Pydantic 模型。
"""
from pydantic import BaseModel

from code_runner.domain.value_objects.execution_result import ExecutionResult


class ExecutionResponse(BaseModel):
    """执行响应"""
    execution_id: str
    stdout: str
    stderr: str
    exit_code: int
    duration: float
    timed_out: bool

    @classmethod
    def from_result(cls, result: ExecutionResult) -> "ExecutionResponse":
        return cls(**result.to_dict())


class HealthResponse(BaseModel):
    """健康检查响应"""
    status: str
    version: str
    uptime: float
