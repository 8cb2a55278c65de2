"""HTTP探测器"""

import asyncio
import time

import aiohttp

from .base import BaseProber
from ..models.health_check import OutcomeKind, ProbeOutcome
from ..version import __version__


def classify_status(status: int) -> OutcomeKind:
    """
    按HTTP状态码分类

    Args:
        status: HTTP状态码

    Returns:
        OutcomeKind: 2xx为HEALTHY，5xx为SERVER_FAILURE，其余为UNCLASSIFIED
    """
    if 200 <= status <= 299:
        return OutcomeKind.HEALTHY
    if 500 <= status <= 599:
        return OutcomeKind.SERVER_FAILURE
    return OutcomeKind.UNCLASSIFIED


class HTTPProber(BaseProber):
    """发送单个GET请求并分类响应，不做任何重试"""

    async def check(self, url: str) -> ProbeOutcome:
        """
        执行一次HTTP探测

        Args:
            url: 目标地址

        Returns:
            ProbeOutcome: 探测结果
        """
        self.logger.info(f"开始健康检查: url={url}")
        start_time = time.time()

        try:
            outcome = await self._request(url, start_time)
        except aiohttp.ClientError as e:
            outcome = ProbeOutcome.transport_failure(
                url, f"HTTP客户端错误: {e}", response_time=time.time() - start_time)
        except asyncio.TimeoutError:
            outcome = ProbeOutcome.transport_failure(
                url, f"HTTP请求超时 ({self.get_timeout()}s)",
                response_time=time.time() - start_time)
        except OSError as e:
            outcome = ProbeOutcome.transport_failure(
                url, f"网络错误: {e}", response_time=time.time() - start_time)

        self._log_outcome(outcome)
        return outcome

    async def _request(self, url: str, start_time: float) -> ProbeOutcome:
        timeout = aiohttp.ClientTimeout(total=self.get_timeout())
        headers = {'User-Agent': f'health-probe/{__version__}'}

        async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
            async with session.get(
                    url, allow_redirects=self.config.follow_redirects) as response:
                status = response.status
                kind = classify_status(status)

                if kind is OutcomeKind.HEALTHY:
                    return ProbeOutcome.healthy(
                        url, status, response_time=time.time() - start_time)

                if kind is OutcomeKind.SERVER_FAILURE:
                    body = await self._read_body(response)
                    return ProbeOutcome.server_failure(
                        url, status, body, response_time=time.time() - start_time)

                return ProbeOutcome.unclassified(
                    url, status, response_time=time.time() - start_time)

    async def _read_body(self, response: aiohttp.ClientResponse) -> str:
        """
        读取响应内容，失败时返回空字符串

        Args:
            response: HTTP响应

        Returns:
            str: 响应内容
        """
        try:
            return await response.text(errors='replace')
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError, LookupError) as e:
            self.logger.warning(f"读取响应内容失败，按空内容处理: url={response.url} error={e}")
            return ''

    def _log_outcome(self, outcome: ProbeOutcome) -> None:
        message = (
            f"健康检查完成: url={outcome.url} outcome={outcome.kind.value} "
            f"status={outcome.status} response_time={outcome.response_time:.3f}s"
        )
        if outcome.kind is OutcomeKind.HEALTHY:
            self.logger.info(message)
        elif outcome.kind is OutcomeKind.TRANSPORT_FAILURE:
            self.logger.warning(f"{message} cause={outcome.cause}")
        else:
            self.logger.warning(message)
