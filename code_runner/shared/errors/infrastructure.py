"""
基础设施错误

定义基础设施层的错误类型。
"""
from typing import Optional


class InfrastructureError(Exception):
    """基础设施错误基类"""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class ContainerError(InfrastructureError):
    """容器错误（Docker daemon 调用失败）"""
    pass
