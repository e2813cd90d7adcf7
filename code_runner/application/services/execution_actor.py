"""
执行 Actor

单消费者命令循环：独占 Docker 客户端，按到达顺序逐个执行请求。
"""
import asyncio
from typing import Optional

from code_runner.application.commands.execute_code import ExecuteCodeCommand
from code_runner.application.services.container_lifecycle import ContainerLifecycleController
from code_runner.domain.value_objects.execution_request import ExecutionRequest
from code_runner.domain.value_objects.execution_result import ExecutionResult
from code_runner.infrastructure.container_scheduler.base import IContainerScheduler
from code_runner.infrastructure.logging import get_logger
from code_runner.shared.errors.infrastructure import ContainerError

logger = get_logger(__name__)

DEFAULT_QUEUE_SIZE = 32


class ExecutionActor:
    """
    执行 Actor

    - 全局同一时刻最多一个容器在执行
    - 请求严格 FIFO
    - 队列满时 submit 阻塞（背压），不丢弃请求
    - 调用方只通过 submit 和一次性回复通道与 Actor 交互，不直接接触 Docker 客户端
    """

    def __init__(
        self,
        scheduler: IContainerScheduler,
        controller: ContainerLifecycleController,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        cleanup_on_startup: bool = True,
    ):
        self._scheduler = scheduler
        self._controller = controller
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=queue_size)
        self._cleanup_on_startup = cleanup_on_startup
        self._task: Optional[asyncio.Task] = None
        self._stopping = False

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def pending(self) -> int:
        """队列中等待执行的命令数"""
        return self._queue.qsize()

    async def start(self) -> None:
        """
        启动 Actor

        如果已在运行，则不执行任何操作。
        """
        if self.is_running:
            logger.warning("Execution actor is already running")
            return

        self._stopping = False
        if self._cleanup_on_startup:
            await self._remove_stale_containers()

        self._task = asyncio.create_task(self._run(), name="execution-actor")
        logger.info("Execution actor started", queue_size=self._queue.maxsize)

    async def stop(self) -> None:
        """停止 Actor 并关闭 Docker 连接（仅在进程退出时调用）"""
        self._stopping = True
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        self._drain_pending()
        await self._scheduler.close()
        logger.info("Execution actor stopped")

    async def submit(self, request: ExecutionRequest) -> ExecutionResult:
        """
        提交执行请求并等待结果

        队列满时阻塞直到有空位。
        """
        if self._stopping or not self.is_running:
            return ExecutionResult.error("execution actor is not running")

        command = ExecuteCodeCommand(payload=request)
        await self._queue.put(command)
        if self._stopping:
            # 在 stop 清空队列后才入队，没有消费者会再读取
            self._drain_pending()
        return await command.reply

    def _drain_pending(self) -> None:
        """回复队列中所有未执行的命令，并唤醒阻塞在 put 上的提交方"""
        while not self._queue.empty():
            command: ExecuteCodeCommand = self._queue.get_nowait()
            command.respond(ExecutionResult.error("execution actor stopped"))

    async def _run(self) -> None:
        while True:
            command: ExecuteCodeCommand = await self._queue.get()
            try:
                await self._handle(command)
            finally:
                self._queue.task_done()

    async def _handle(self, command: ExecuteCodeCommand) -> None:
        # 调用方已离开时仍然执行，保证容器被清理
        try:
            result = await self._controller.run(command.payload)
        except asyncio.CancelledError:
            command.respond(ExecutionResult.error("execution actor stopped"))
            raise
        except Exception as e:
            logger.exception("Unexpected error during execution", error=str(e))
            result = ExecutionResult.error(f"internal error: {e}")

        if not command.respond(result):
            logger.info("Caller went away before result was delivered", execution_id=result.execution_id)

    async def _remove_stale_containers(self) -> None:
        """删除上一个进程遗留的受管容器"""
        try:
            container_ids = await self._scheduler.list_managed_containers()
        except ContainerError as e:
            logger.warning("Failed to list stale containers", error=e.message)
            return

        for container_id in container_ids:
            try:
                await self._scheduler.remove_container(container_id, force=True, remove_volumes=True)
                logger.info("Removed stale container", container_id=container_id)
            except ContainerError as e:
                logger.warning("Failed to remove stale container", container_id=container_id, error=e.message)
