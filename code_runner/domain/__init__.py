"""
领域层

包含语言、执行请求、执行结果等值对象，以及无副作用的领域服务。
"""
