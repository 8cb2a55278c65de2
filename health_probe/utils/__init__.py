"""工具模块"""

from .exceptions import (
    HealthProbeError, MalformedRequestError, ConfigError,
    AlertError, AlertConfigError, AlertSendError, ErrorCode
)
from .log_manager import LogManager, LogLevel, get_logger, configure_logging, log_manager

__all__ = [
    'HealthProbeError', 'MalformedRequestError', 'ConfigError', 'AlertError',
    'AlertConfigError', 'AlertSendError', 'ErrorCode',
    'LogManager', 'LogLevel', 'get_logger', 'configure_logging', 'log_manager'
]
