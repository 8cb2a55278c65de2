"""探测器基类"""

from abc import ABC, abstractmethod

from ..models.config import ProbeConfig
from ..models.health_check import ProbeOutcome
from ..utils.log_manager import get_logger


class BaseProber(ABC):
    """探测器抽象基类"""

    def __init__(self, config: ProbeConfig):
        """
        初始化探测器

        Args:
            config: 进程级配置
        """
        self.config = config
        self.prober_type = self.__class__.__name__.replace('Prober', '').lower()
        self.logger = get_logger(f'prober.{self.prober_type}')

    @abstractmethod
    async def check(self, url: str) -> ProbeOutcome:
        """
        探测目标并返回分类结果，传输错误以结果形式返回而不是抛出

        Args:
            url: 目标地址

        Returns:
            ProbeOutcome: 探测结果
        """
        pass

    def get_timeout(self) -> float:
        """
        获取超时时间配置

        Returns:
            float: 超时时间（秒）
        """
        return self.config.probe_timeout
