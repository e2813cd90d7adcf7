from code_runner.application.services.log_collector import LogCollector
from code_runner.application.services.container_lifecycle import ContainerLifecycleController
from code_runner.application.services.execution_actor import ExecutionActor
from code_runner.application.services.execution_service import ExecutionService

__all__ = [
    "LogCollector",
    "ContainerLifecycleController",
    "ExecutionActor",
    "ExecutionService",
]
