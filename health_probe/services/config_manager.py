"""配置管理器"""

import os
from typing import Any, Dict, Mapping, Optional

import yaml

from ..models.config import ProbeConfig
from ..utils.config_validator import ConfigValidator
from ..utils.exceptions import ConfigError, ErrorCode
from ..utils.log_manager import get_logger

CONFIG_PATH_ENV = 'HEALTH_PROBE_CONFIG'

# 环境变量 -> 配置项
ENV_MAPPING = {
    'SLACK_BOT_TOKEN': 'slack_bot_token',
    'SLACK_CHANNEL': 'slack_channel',
    'SLACK_API_URL': 'slack_api_url',
    'PROBE_TIMEOUT': 'probe_timeout',
    'NOTIFY_TIMEOUT': 'notify_timeout',
    'FOLLOW_REDIRECTS': 'follow_redirects',
    'LOG_LEVEL': 'log_level',
    'LOG_FILE': 'log_file',
}

FLOAT_KEYS = ('probe_timeout', 'notify_timeout')
BOOL_KEYS = ('follow_redirects',)


class ConfigManager:
    """配置管理器，合并YAML配置文件和环境变量

    优先级：环境变量 > YAML文件 > 默认值
    """

    def __init__(self, config_path: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        """
        初始化配置管理器

        Args:
            config_path: 配置文件路径，为空时读取HEALTH_PROBE_CONFIG环境变量
            environ: 环境变量，默认使用os.environ
        """
        self.environ = os.environ if environ is None else environ
        self.config_path = config_path or self.environ.get(CONFIG_PATH_ENV) or None
        self.logger = get_logger('config_manager')

    def load_config(self) -> ProbeConfig:
        """
        加载并验证配置

        Returns:
            ProbeConfig: 配置

        Raises:
            ConfigError: 配置加载或验证失败
        """
        config: Dict[str, Any] = {}

        if self.config_path:
            config.update(self._load_file(self.config_path))

        config.update(self._load_environ())

        ConfigValidator.validate_probe_config(config)

        if config.get('log_level'):
            config['log_level'] = str(config['log_level']).upper()

        unknown = set(config) - set(ProbeConfig.__dataclass_fields__)
        if unknown:
            self.logger.warning(f"忽略未知配置项: {', '.join(sorted(unknown))}")
            for key in unknown:
                del config[key]

        probe_config = ProbeConfig(**config)
        self.logger.debug(f"配置加载完成: {probe_config!r}")
        return probe_config

    def _load_file(self, config_path: str) -> Dict[str, Any]:
        """
        加载YAML配置文件

        Args:
            config_path: 配置文件路径

        Returns:
            Dict[str, Any]: 配置字典
        """
        self.logger.info(f"开始加载配置文件: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as file:
                config = yaml.safe_load(file)
        except FileNotFoundError:
            self.logger.error(f"配置文件不存在: {config_path}")
            raise ConfigError(f"配置文件不存在: {config_path}",
                              ErrorCode.CONFIG_FILE_NOT_FOUND, config_path=config_path)
        except PermissionError:
            self.logger.error(f"没有权限读取配置文件: {config_path}")
            raise ConfigError(f"没有权限读取配置文件: {config_path}", config_path=config_path)
        except yaml.YAMLError as e:
            self.logger.error(f"YAML格式错误: {e}")
            raise ConfigError(f"YAML格式错误: {e}",
                              ErrorCode.CONFIG_PARSE_ERROR, config_path=config_path)

        if config is None:
            return {}

        if not isinstance(config, dict):
            raise ConfigError("配置文件根节点必须是字典类型", config_path=config_path)

        return config

    def _load_environ(self) -> Dict[str, Any]:
        """
        读取环境变量中的配置项，空字符串视为未设置

        Returns:
            Dict[str, Any]: 配置字典
        """
        config: Dict[str, Any] = {}

        for env_name, key in ENV_MAPPING.items():
            value = self.environ.get(env_name)
            if value is None or value == '':
                continue

            if key in FLOAT_KEYS:
                try:
                    config[key] = float(value)
                except ValueError:
                    raise ConfigError(f"环境变量 {env_name} 必须是数字: {value}")
            elif key in BOOL_KEYS:
                config[key] = self._parse_bool(env_name, value)
            else:
                config[key] = value

        return config

    @staticmethod
    def _parse_bool(env_name: str, value: str) -> bool:
        lowered = value.strip().lower()
        if lowered in ('1', 'true', 'yes', 'on'):
            return True
        if lowered in ('0', 'false', 'no', 'off'):
            return False
        raise ConfigError(f"环境变量 {env_name} 必须是布尔值: {value}")
