"""运行配置模型"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_SLACK_API_URL = 'https://slack.com/api/chat.postMessage'
DEFAULT_SLACK_CHANNEL = 'notifications'


@dataclass(frozen=True)
class ProbeConfig:
    """解析完成的进程级配置，构造时注入探测器和告警器"""
    slack_bot_token: Optional[str] = None
    slack_channel: str = DEFAULT_SLACK_CHANNEL
    slack_api_url: str = DEFAULT_SLACK_API_URL
    probe_timeout: float = 5.0
    notify_timeout: float = 10.0
    follow_redirects: bool = True
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def logging_config(self) -> dict:
        """转换为日志管理器的配置"""
        config = {'log_level': self.log_level}
        if self.log_file:
            config['log_file'] = self.log_file
        return config

    def __repr__(self) -> str:
        token = '***' if self.slack_bot_token else None
        return (
            f"ProbeConfig(slack_bot_token={token!r}, slack_channel={self.slack_channel!r}, "
            f"slack_api_url={self.slack_api_url!r}, probe_timeout={self.probe_timeout}, "
            f"notify_timeout={self.notify_timeout}, follow_redirects={self.follow_redirects}, "
            f"log_level={self.log_level!r}, log_file={self.log_file!r})"
        )
