"""
依赖注入配置

创建 Docker 调度器、生命周期控制器、执行 Actor 和执行服务，并存储到应用状态中。
"""
from fastapi import FastAPI, Request

from code_runner.application.services.container_lifecycle import ContainerLifecycleController
from code_runner.application.services.execution_actor import ExecutionActor
from code_runner.application.services.execution_service import ExecutionService
from code_runner.infrastructure.config.settings import Settings, get_settings
from code_runner.infrastructure.container_scheduler.docker_scheduler import DockerScheduler
from code_runner.infrastructure.logging import get_logger

logger = get_logger(__name__)


def build_execution_actor(settings: Settings) -> ExecutionActor:
    """构建执行 Actor（Actor 独占 Docker 调度器）"""
    scheduler = DockerScheduler(docker_url=settings.docker_url)
    controller = ContainerLifecycleController(scheduler=scheduler, settings=settings)
    logger.info(
        "Initialized Docker scheduler",
        docker_url=settings.docker_url,
        network=settings.docker_network,
        memory_bytes=settings.memory_limit_bytes,
        cpu_shares=settings.docker_cpu_shares,
    )
    return ExecutionActor(
        scheduler=scheduler,
        controller=controller,
        queue_size=settings.actor_queue_size,
        cleanup_on_startup=settings.cleanup_on_startup,
    )


async def initialize_dependencies(app: FastAPI, settings: Settings = None) -> None:
    """初始化所有依赖项，启动执行 Actor"""
    settings = settings or get_settings()
    actor = getattr(app.state, "execution_actor", None) or build_execution_actor(settings)
    await actor.start()

    app.state.execution_actor = actor
    app.state.execution_service = ExecutionService(actor=actor)


async def cleanup_dependencies(app: FastAPI) -> None:
    """清理依赖项（停止 Actor，关闭 Docker 连接）"""
    actor = getattr(app.state, "execution_actor", None)
    if actor is not None:
        await actor.stop()


def get_execution_service(request: Request) -> ExecutionService:
    """获取执行服务（FastAPI 依赖）"""
    return request.app.state.execution_service
