"""
Pytest 配置文件

提供不依赖真实 Docker daemon 的公共 fixture。
"""
import pytest

from code_runner.infrastructure.config.settings import Settings
from tests.helpers import FakeScheduler


@pytest.fixture
def settings():
    """测试配置（不读取环境变量中的 .env）"""
    return Settings(
        _env_file=None,
        docker_network="none",
        docker_memory_limit="256m",
        docker_cpu_shares=256,
        default_timeout=5,
        max_output_size=1024,
        actor_queue_size=4,
    )


@pytest.fixture
def scheduler():
    """模拟 Docker 调度器"""
    return FakeScheduler()
