"""配置验证工具"""

from typing import Dict, Any
from urllib.parse import urlparse

from .exceptions import ConfigError


class ConfigValidator:
    """配置验证器"""

    VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    @staticmethod
    def validate_probe_config(config: Dict[str, Any]) -> None:
        """
        验证合并后的探测配置

        Args:
            config: 配置字典

        Raises:
            ConfigError: 配置验证失败
        """
        if not isinstance(config, dict):
            raise ConfigError("配置必须是字典类型")

        for key in ('probe_timeout', 'notify_timeout'):
            value = config.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigError(f"{key} 必须是正数")

        follow_redirects = config.get('follow_redirects')
        if follow_redirects is not None and not isinstance(follow_redirects, bool):
            raise ConfigError("follow_redirects 必须是布尔值")

        channel = config.get('slack_channel')
        if channel is not None and (not isinstance(channel, str) or not channel.strip()):
            raise ConfigError("slack_channel 必须是非空字符串")

        api_url = config.get('slack_api_url')
        if api_url is not None:
            parsed = urlparse(api_url) if isinstance(api_url, str) else None
            if not parsed or parsed.scheme not in ('http', 'https') or not parsed.netloc:
                raise ConfigError(f"slack_api_url 格式无效: {api_url}")

        log_level = config.get('log_level')
        if log_level is not None:
            if str(log_level).upper() not in ConfigValidator.VALID_LOG_LEVELS:
                raise ConfigError(
                    f"log_level 必须是以下值之一: {ConfigValidator.VALID_LOG_LEVELS}")
