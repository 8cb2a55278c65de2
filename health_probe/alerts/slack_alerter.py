"""Slack告警器实现"""

import asyncio
import json
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import aiohttp

from .base import BaseAlerter
from ..models.config import ProbeConfig
from ..models.health_check import AlertMessage
from ..utils.exceptions import AlertConfigError, AlertSendError, ErrorCode
from ..utils.log_manager import get_logger


class SlackAlerter(BaseAlerter):
    """通过Slack chat.postMessage接口发送告警，不做重试"""

    def __init__(self, config: ProbeConfig, name: str = 'slack'):
        """
        初始化Slack告警器

        令牌缺失不会在这里报错：大多数调用不需要发送通知，
        只有真正发送时才检查配置。

        Args:
            config: 进程级配置
            name: 告警器名称
        """
        super().__init__(name, config)
        self.logger = get_logger(f'alerter.{self.alerter_type}.{self.name}')
        self.api_url = config.slack_api_url
        self.logger.debug(f"Slack告警器配置: {self.get_config_summary()}")

    def validate_config(self) -> bool:
        """
        验证配置参数是否有效

        Returns:
            bool: 配置是否有效
        """
        if not self.config.slack_bot_token:
            self.logger.error(f"Slack告警器 {self.name} 缺少SLACK_BOT_TOKEN配置")
            return False

        if not self.config.slack_channel:
            self.logger.error(f"Slack告警器 {self.name} 缺少频道配置")
            return False

        parsed_url = urlparse(self.api_url)
        if not parsed_url.scheme or not parsed_url.netloc:
            self.logger.error(f"Slack告警器 {self.name} API地址格式无效: {self.api_url}")
            return False

        return True

    async def send_alert(self, message: AlertMessage) -> bool:
        """
        发送告警消息

        Args:
            message: 告警消息对象

        Returns:
            bool: 发送成功返回True

        Raises:
            AlertConfigError: 缺少令牌或频道
            AlertSendError: 网络错误、非2xx响应或Slack返回ok=false
        """
        if not self.validate_config():
            raise AlertConfigError(
                "Slack告警配置不完整，无法发送通知", alert_name=self.name)

        channel = message.channel or self.config.slack_channel
        self.logger.info(
            f"开始发送告警消息: channel={channel} length={len(message.text)}")

        timeout = aiohttp.ClientTimeout(total=self.get_timeout())
        form = self._prepare_form(channel, message.text)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            try:
                async with session.post(
                        self.api_url,
                        data=form,
                        headers={'Content-Type': 'application/x-www-form-urlencoded'}
                ) as response:
                    if response.status < 200 or response.status >= 300:
                        response_text = await response.text(errors='replace')
                        self.logger.error(
                            f"Slack告警器 {self.name} 收到错误响应 "
                            f"(状态码: {response.status}, 响应: {response_text[:200]})"
                        )
                        raise AlertSendError(
                            f"Slack返回HTTP状态码 {response.status}",
                            alert_name=self.name,
                            details={'status': response.status}
                        )

                    body = await self._read_json(response)

            except aiohttp.ClientError as e:
                self.logger.error(f"Slack告警器 {self.name} 网络请求失败: {e}")
                raise AlertSendError(
                    f"HTTP请求失败: {e}",
                    alert_name=self.name,
                    error_code=ErrorCode.ALERT_NETWORK_ERROR,
                    cause=e
                )
            except asyncio.TimeoutError as e:
                self.logger.error(f"Slack告警器 {self.name} 请求超时")
                raise AlertSendError(
                    "HTTP请求超时",
                    alert_name=self.name,
                    error_code=ErrorCode.ALERT_NETWORK_ERROR,
                    cause=e
                )

        # Slack在HTTP 200里用ok=false表示拒绝（如channel_not_found、invalid_auth）
        if isinstance(body, dict) and body.get('ok') is False:
            error = body.get('error', 'unknown_error')
            self.logger.error(f"Slack告警器 {self.name} Slack拒绝消息: error={error}")
            raise AlertSendError(
                f"Slack拒绝消息: {error}",
                alert_name=self.name,
                error_code=ErrorCode.ALERT_REJECTED,
                details={'slack_error': error}
            )

        self.logger.info(f"Slack告警器 {self.name} 发送成功: channel={channel}")
        return True

    def _prepare_form(self, channel: str, text: str) -> Dict[str, str]:
        """
        准备表单字段

        Args:
            channel: 目标频道
            text: 消息内容

        Returns:
            Dict[str, str]: 表单字段
        """
        return {
            'token': self.config.slack_bot_token,
            'channel': channel,
            'text': text,
        }

    async def _read_json(self, response: aiohttp.ClientResponse) -> Optional[Any]:
        # 响应不是JSON（包括无法解码的内容）时只按状态码判断
        try:
            return await response.json(content_type=None)
        except (json.JSONDecodeError, UnicodeDecodeError, aiohttp.ContentTypeError):
            self.logger.debug(f"Slack告警器 {self.name} 响应不是JSON")
            return None

    def get_config_summary(self) -> Dict[str, Any]:
        """
        获取配置摘要（用于调试，不包含令牌）

        Returns:
            Dict[str, Any]: 配置摘要
        """
        return {
            'name': self.name,
            'type': self.alerter_type,
            'url': self.api_url,
            'channel': self.config.slack_channel,
            'timeout': self.get_timeout(),
            'has_token': bool(self.config.slack_bot_token),
        }
