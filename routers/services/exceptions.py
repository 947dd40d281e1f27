"""
业务异常定义
服务层抛出，路由层转换为HTTP错误
"""


class JournalError(Exception):
    """运行日志业务异常基类"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(JournalError):
    """必填字段缺失或取值非法"""


class NotFoundError(JournalError):
    """操作的目标记录不存在"""


class InvalidStateError(JournalError):
    """非法的状态流转，如重复撤销"""
