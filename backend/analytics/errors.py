from typing import Dict, List, Optional


class AnalyticsError(Exception):
    """统计模块异常基类"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AnalyticsError):
    """参数校验失败（400）"""
    status_code = 400

    def __init__(self, field: str, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or [{"field": field, "message": message}]


class NotFoundError(AnalyticsError):
    """用户不存在（404）"""
    status_code = 404


class ComputationError(AnalyticsError):
    """数据源不可用，计算中断（503），不会写入任何结果"""
    status_code = 503
