"""
执行 REST API 路由

- POST /execute: JSON 请求体
- POST /execute/file: multipart 表单，code 字段为源码（文本或上传文件）
"""
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, Request
from starlette.datastructures import UploadFile

from code_runner.application.services.execution_service import ExecutionService
from code_runner.domain.value_objects.execution_result import ExecutionResult
from code_runner.infrastructure.dependencies import get_execution_service
from code_runner.infrastructure.logging import get_logger
from code_runner.interfaces.rest.schemas.request import ExecuteCodeRequest
from code_runner.interfaces.rest.schemas.response import ExecutionResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/execute", tags=["executions"])


@router.post("", response_model=ExecutionResponse)
async def execute_code(
    request: ExecuteCodeRequest,
    service: ExecutionService = Depends(get_execution_service),
) -> ExecutionResponse:
    """
    执行代码

    - **code**: 要执行的代码
    - **language**: 编程语言 (python, javascript, golang, kotlin)
    - **timeout**: 超时时间（秒）
    """
    result = await service.execute(
        language=request.language,
        code=request.code,
        timeout=request.timeout,
        stdin=request.stdin,
    )
    return ExecutionResponse.from_result(result)


@router.post("/file", response_model=ExecutionResponse)
async def execute_code_from_file(
    http_request: Request,
    language: str = Query(..., description="编程语言"),
    timeout: Optional[int] = Query(None, ge=1, description="超时时间（秒）"),
    service: ExecutionService = Depends(get_execution_service),
) -> ExecutionResponse:
    """从 multipart 表单的 code 字段读取源码并执行"""
    try:
        code = await _read_code_field(http_request)
    except UnicodeDecodeError:
        code = None

    if not code:
        return ExecutionResponse.from_result(ExecutionResult.error("code is empty"))

    result = await service.execute(language=language, code=code, timeout=timeout)
    return ExecutionResponse.from_result(result)


async def _read_code_field(http_request: Request) -> Optional[str]:
    form = await http_request.form()
    try:
        value: Union[str, UploadFile, None] = form.get("code")
        if isinstance(value, UploadFile):
            return (await value.read()).decode("utf-8")
        return value
    finally:
        await form.close()
