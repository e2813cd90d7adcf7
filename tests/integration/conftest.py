"""
集成测试配置

通过 httpx ASGITransport 直接调用 FastAPI 应用。
ASGITransport 不会触发 lifespan，执行服务由 fixture 手动装配。
"""
from typing import AsyncGenerator

import httpx
import pytest

from code_runner.application.services.container_lifecycle import ContainerLifecycleController
from code_runner.application.services.execution_actor import ExecutionActor
from code_runner.application.services.execution_service import ExecutionService
from code_runner.interfaces.rest.main import create_app
from tests.helpers import FakeScheduler, stdout_chunk


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    """输出 hi 并以 0 退出的内存调度器"""
    return FakeScheduler(exit_code=0, log_chunks=[stdout_chunk("hi\n")])


@pytest.fixture
async def actor(settings, fake_scheduler) -> AsyncGenerator[ExecutionActor, None]:
    """运行中的执行 Actor"""
    controller = ContainerLifecycleController(fake_scheduler, settings)
    execution_actor = ExecutionActor(fake_scheduler, controller, queue_size=settings.actor_queue_size)
    await execution_actor.start()
    yield execution_actor
    await execution_actor.stop()


@pytest.fixture
async def client(actor) -> AsyncGenerator[httpx.AsyncClient, None]:
    """绑定到测试应用的 HTTP 客户端"""
    app = create_app()
    app.state.execution_actor = actor
    app.state.execution_service = ExecutionService(actor=actor)

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as http_client:
        yield http_client
