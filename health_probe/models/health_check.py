"""健康检查相关的数据模型"""

import ipaddress
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from ..utils.exceptions import MalformedRequestError


@dataclass(frozen=True)
class HealthCheckRequest:
    """一次调用要探测的目标"""
    url: str

    @classmethod
    def from_event(cls, event: Any) -> 'HealthCheckRequest':
        """
        从触发事件中解析探测请求

        事件格式: {"detail": {"url": "https://..."}, ...}

        Args:
            event: 触发事件

        Returns:
            HealthCheckRequest: 探测请求

        Raises:
            MalformedRequestError: 事件缺少detail或detail.url，或URL无效
        """
        if not isinstance(event, Mapping):
            raise MalformedRequestError("触发事件必须是字典类型")

        detail = event.get('detail')
        if detail is None:
            raise MalformedRequestError("触发事件缺少detail字段", field='detail')
        if not isinstance(detail, Mapping):
            raise MalformedRequestError("detail字段必须是字典类型", field='detail')

        url = detail.get('url')
        if url is None:
            raise MalformedRequestError("detail中缺少url字段", field='detail.url')
        if not isinstance(url, str) or not url.strip():
            raise MalformedRequestError("url必须是非空字符串", field='detail.url')

        try:
            parsed = urlparse(url)
            # 访问port会校验端口，方括号主机必须是IP地址
            parsed.port
            if parsed.netloc.rpartition('@')[2].startswith('['):
                ipaddress.ip_address(parsed.hostname or '')
        except ValueError as e:
            raise MalformedRequestError(
                f"url不是有效的绝对HTTP地址: {url}", field='detail.url', cause=e)

        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise MalformedRequestError(
                f"url不是有效的绝对HTTP地址: {url}", field='detail.url')

        return cls(url=url)


class OutcomeKind(Enum):
    """探测结果分类"""
    HEALTHY = 'healthy'
    SERVER_FAILURE = 'server_failure'
    UNCLASSIFIED = 'unclassified'
    TRANSPORT_FAILURE = 'transport_failure'


# 传输失败暂不告警，只有服务端错误会触发通知
ALERTABLE_KINDS = frozenset({OutcomeKind.SERVER_FAILURE})


@dataclass(frozen=True)
class ProbeOutcome:
    """探测结果，按kind区分的标签联合"""
    kind: OutcomeKind
    url: str
    status: Optional[int] = None
    body: Optional[str] = None
    cause: Optional[str] = None
    response_time: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def healthy(cls, url: str, status: int, response_time: float = 0.0) -> 'ProbeOutcome':
        return cls(OutcomeKind.HEALTHY, url, status=status, response_time=response_time)

    @classmethod
    def server_failure(cls, url: str, status: int, body: str,
                       response_time: float = 0.0) -> 'ProbeOutcome':
        return cls(OutcomeKind.SERVER_FAILURE, url, status=status, body=body,
                   response_time=response_time)

    @classmethod
    def unclassified(cls, url: str, status: int, response_time: float = 0.0) -> 'ProbeOutcome':
        return cls(OutcomeKind.UNCLASSIFIED, url, status=status, response_time=response_time)

    @classmethod
    def transport_failure(cls, url: str, cause: str,
                          response_time: float = 0.0) -> 'ProbeOutcome':
        return cls(OutcomeKind.TRANSPORT_FAILURE, url, cause=cause,
                   response_time=response_time)

    @property
    def is_alertable(self) -> bool:
        """是否需要发送告警"""
        return self.kind in ALERTABLE_KINDS

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'kind': self.kind.value,
            'url': self.url,
            'response_time': round(self.response_time, 3),
            'timestamp': self.timestamp.isoformat(),
        }
        if self.status is not None:
            data['status'] = self.status
        if self.cause is not None:
            data['cause'] = self.cause
        return data


@dataclass(frozen=True)
class AlertMessage:
    """告警消息模型"""
    channel: str
    text: str


class InvocationState(Enum):
    """单次调用的状态"""
    RECEIVED = 'received'
    PROBED = 'probed'
    NOTIFYING = 'notifying'
    DONE = 'done'


@dataclass
class InvocationResult:
    """单次调用的汇总结果"""
    request: HealthCheckRequest
    outcome: ProbeOutcome
    state: InvocationState = InvocationState.PROBED
    notification_attempted: bool = False
    notification_delivered: bool = False
    notification_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """转换为可JSON序列化的字典，作为函数返回值"""
        return {
            'url': self.request.url,
            'state': self.state.value,
            'outcome': self.outcome.to_dict(),
            'notification': {
                'attempted': self.notification_attempted,
                'delivered': self.notification_delivered,
                'error': self.notification_error,
            },
        }
