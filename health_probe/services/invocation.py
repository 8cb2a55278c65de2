"""单次健康检查调用

负责把触发事件串成一次完整的调用：解析请求、探测目标，
结果需要告警时发送通知。通知失败只记录日志，不影响调用结果。
"""

from typing import Any, Optional

from ..alerts.base import BaseAlerter
from ..checkers.base import BaseProber
from ..models.health_check import (
    HealthCheckRequest, InvocationResult, InvocationState, ProbeOutcome
)
from ..utils.exceptions import AlertError
from ..utils.log_manager import get_logger


class HealthCheckInvocation:
    """健康检查调用编排器"""

    def __init__(self, prober: BaseProber, alerter: BaseAlerter):
        """初始化调用编排器

        Args:
            prober: 探测器
            alerter: 告警器
        """
        self.prober = prober
        self.alerter = alerter
        self.logger = get_logger('invocation')

    async def run(self, event: Any, request_id: Optional[str] = None) -> InvocationResult:
        """执行一次调用

        Args:
            event: 触发事件
            request_id: 运行时请求ID，仅用于日志

        Returns:
            InvocationResult: 调用结果

        Raises:
            MalformedRequestError: 事件中没有可用的URL，此时不会发出任何请求
        """
        prefix = f"[req_id={request_id}] " if request_id else ""

        request = HealthCheckRequest.from_event(event)
        self.logger.info(f"{prefix}收到健康检查请求: url={request.url}")

        outcome = await self.prober.check(request.url)
        result = InvocationResult(request=request, outcome=outcome)

        if outcome.is_alertable:
            result.state = InvocationState.NOTIFYING
            await self._notify(outcome, result, prefix)
        else:
            self.logger.debug(f"{prefix}结果无需告警: outcome={outcome.kind.value}")

        result.state = InvocationState.DONE
        self.logger.info(
            f"{prefix}调用完成: url={request.url} outcome={outcome.kind.value} "
            f"notified={result.notification_delivered}"
        )
        return result

    async def _notify(self, outcome: ProbeOutcome, result: InvocationResult,
                      prefix: str) -> None:
        """发送告警，失败时记录到结果中"""
        result.notification_attempted = True
        try:
            result.notification_delivered = await self.alerter.notify(outcome.body or '')
        except AlertError as e:
            result.notification_error = e.format_error()
            self.logger.error(f"{prefix}告警发送失败: {e.format_error()}")
