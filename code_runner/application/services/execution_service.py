"""
执行应用服务

请求校验边界：把未经校验的字段转换为 ExecutionRequest，
校验失败时直接返回错误形态的结果，不会触达 Docker daemon。
"""
from typing import Optional

from code_runner.application.services.execution_actor import ExecutionActor
from code_runner.domain.value_objects.execution_request import ExecutionRequest
from code_runner.domain.value_objects.execution_result import ExecutionResult
from code_runner.infrastructure.logging import get_logger
from code_runner.shared.errors.domain import ValidationError

logger = get_logger(__name__)


class ExecutionService:
    """执行应用服务"""

    def __init__(self, actor: ExecutionActor):
        self._actor = actor

    async def execute(
        self,
        language: str,
        code: Optional[str],
        timeout: Optional[int] = None,
        stdin: Optional[str] = None,
    ) -> ExecutionResult:
        """
        校验并执行代码

        Args:
            language: 语言文本（大小写不敏感）
            code: 源码
            timeout: 超时时间（秒），为空时使用默认超时
            stdin: 标准输入（当前不会传给容器）

        Returns:
            ExecutionResult，校验失败时为错误形态
        """
        try:
            request = ExecutionRequest.from_raw(
                language=language,
                code=code,
                timeout=timeout,
                stdin=stdin,
            )
        except ValidationError as e:
            logger.info("Rejected execution request", error=e.message, **e.details)
            return ExecutionResult.error(e.message)

        logger.info("Executing code", language=request.language.value, timeout=request.timeout)
        return await self._actor.submit(request)
