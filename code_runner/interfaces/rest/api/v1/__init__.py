"""
API v1 路由包
"""
from code_runner.interfaces.rest.api.v1 import executions
from code_runner.interfaces.rest.api.v1 import health
