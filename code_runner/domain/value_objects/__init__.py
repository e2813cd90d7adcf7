"""
值对象模块

包含所有领域值对象。
"""
from code_runner.domain.value_objects.language import LanguageTag
from code_runner.domain.value_objects.language_profile import LanguageProfile, resolve_profile
from code_runner.domain.value_objects.execution_request import ExecutionRequest
from code_runner.domain.value_objects.execution_result import ExecutionResult, ERROR_EXECUTION_ID

__all__ = [
    "LanguageTag",
    "LanguageProfile",
    "resolve_profile",
    "ExecutionRequest",
    "ExecutionResult",
    "ERROR_EXECUTION_ID",
]
