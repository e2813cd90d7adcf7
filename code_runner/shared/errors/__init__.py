"""
错误类型包
"""
from code_runner.shared.errors.domain import DomainError, ValidationError
from code_runner.shared.errors.infrastructure import InfrastructureError, ContainerError

__all__ = [
    "DomainError",
    "ValidationError",
    "InfrastructureError",
    "ContainerError",
]
