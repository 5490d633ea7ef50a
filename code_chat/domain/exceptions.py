"""统一业务异常模型。

Provider 层抛出的错误都继承自 BusinessError，
由 Agent 在面板边界统一捕获并转换为固定的失败提示。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "NETWORK_ERROR"）。
        message: 可读错误信息，仅写入日志，不直接展示给用户。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider、响应体等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、读取中断等。"""


class ApiError(BusinessError):
    """API 返回 error 字段、非 2xx 状态或无法解析的响应体时抛出。"""


class ValidationError(BusinessError):
    """参数或配置校验失败，例如缺少 API 密钥。"""
