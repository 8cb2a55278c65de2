"""定时健康探测：探测目标URL，服务端错误时发送Slack告警"""

from .version import __version__

__all__ = ['__version__']
