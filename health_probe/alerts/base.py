"""告警器基类"""

from abc import ABC, abstractmethod

from ..models.config import ProbeConfig
from ..models.health_check import AlertMessage


class BaseAlerter(ABC):
    """告警器抽象基类"""

    def __init__(self, name: str, config: ProbeConfig):
        """
        初始化告警器

        Args:
            name: 告警器名称
            config: 进程级配置
        """
        self.name = name
        self.config = config
        self.alerter_type = self.__class__.__name__.replace('Alerter', '').lower()

    @abstractmethod
    async def send_alert(self, message: AlertMessage) -> bool:
        """
        发送告警消息

        Args:
            message: 告警消息对象

        Returns:
            bool: 发送成功返回True

        Raises:
            AlertConfigError: 告警配置不完整
            AlertSendError: 发送失败
        """
        pass

    @abstractmethod
    def validate_config(self) -> bool:
        """
        验证配置参数是否有效

        Returns:
            bool: 配置是否有效
        """
        pass

    async def notify(self, text: str) -> bool:
        """
        向默认频道发送一条文本告警

        Args:
            text: 告警内容

        Returns:
            bool: 发送成功返回True
        """
        return await self.send_alert(AlertMessage(channel=self.config.slack_channel, text=text))

    def get_timeout(self) -> float:
        """
        获取超时时间配置

        Returns:
            float: 超时时间（秒）
        """
        return self.config.notify_timeout
