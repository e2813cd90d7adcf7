"""
REST API 请求模式

定义 FastAPI 的请求 Pydantic 模型。
语言和代码的业务校验由 ExecutionService 完成，失败时返回错误形态的结果。
"""
from typing import Optional

from pydantic import BaseModel, Field


class ExecuteCodeRequest(BaseModel):
    """执行代码请求"""
    code: str = Field("", description="要执行的代码")
    language: str = Field(..., description="编程语言 (python, javascript, golang, kotlin)")
    timeout: Optional[int] = Field(None, ge=1, description="超时时间（秒），为空时使用默认值")
    stdin: Optional[str] = Field(None, description="标准输入（当前不会传给容器）")
