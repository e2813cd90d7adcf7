"""
FastAPI 主应用

代码执行服务的 FastAPI 应用入口。
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

# Configure logging FIRST before any other imports
from code_runner.infrastructure.config.settings import get_settings
from code_runner.infrastructure.logging import configure_logging, get_logger

_settings = get_settings()
configure_logging(
    log_level=_settings.log_level,
    log_format=_settings.log_format,
)

logger = get_logger(__name__)

from code_runner.infrastructure.dependencies import initialize_dependencies, cleanup_dependencies
from code_runner.interfaces.rest.api.v1 import executions, health
from code_runner.interfaces.rest.middleware import RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    应用生命周期管理

    启动时创建并启动执行 Actor，关闭时停止 Actor 并关闭 Docker 连接。
    """
    logger.info("Starting Code Runner", version=_settings.app_version)
    await initialize_dependencies(app, _settings)
    logger.info("Dependencies initialized")

    yield

    logger.info("Shutting down Code Runner")
    await cleanup_dependencies(app)


def create_app() -> FastAPI:
    """
    创建 FastAPI 应用

    使用工厂模式创建应用，便于测试和配置。
    """
    app = FastAPI(
        title=_settings.app_name,
        description="在资源受限的 Docker 容器中执行代码",
        version=_settings.app_version,
        lifespan=lifespan,
    )

    _register_exception_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router)
    app.include_router(executions.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """注册异常处理器"""

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """全局异常处理"""
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred",
                "detail": str(exc) if _settings.debug else None,
            },
        )


# 创建应用实例
app = create_app()


def run() -> None:
    """命令行入口"""
    import uvicorn

    uvicorn.run(
        "code_runner.interfaces.rest.main:app",
        host=_settings.host,
        port=_settings.port,
        log_level=_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
