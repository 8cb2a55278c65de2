"""服务模块"""

from .config_manager import ConfigManager
from .invocation import HealthCheckInvocation

__all__ = ['ConfigManager', 'HealthCheckInvocation']
