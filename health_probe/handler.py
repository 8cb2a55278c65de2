"""函数入口

由定时事件触发，事件格式为 {"detail": {"url": "..."}}。
"""

import asyncio
from typing import Any, Dict, Optional

from .alerts.slack_alerter import SlackAlerter
from .checkers.http_prober import HTTPProber
from .models.config import ProbeConfig
from .services.config_manager import ConfigManager
from .services.invocation import HealthCheckInvocation
from .utils.exceptions import MalformedRequestError
from .utils.log_manager import configure_logging, get_logger


def build_invocation(config: ProbeConfig) -> HealthCheckInvocation:
    """按配置组装探测器和告警器

    Args:
        config: 进程级配置

    Returns:
        HealthCheckInvocation: 调用编排器
    """
    return HealthCheckInvocation(HTTPProber(config), SlackAlerter(config))


async def handle_event(event: Any, config: Optional[ProbeConfig] = None,
                       request_id: Optional[str] = None) -> Dict[str, Any]:
    """处理一个触发事件

    Args:
        event: 触发事件
        config: 配置，为空时从环境加载
        request_id: 运行时请求ID

    Returns:
        Dict[str, Any]: 调用结果
    """
    if config is None:
        config = ConfigManager().load_config()
        configure_logging(config.logging_config())

    invocation = build_invocation(config)
    result = await invocation.run(event, request_id=request_id)
    return result.to_dict()


def lambda_handler(event: Any, context: Any) -> Dict[str, Any]:
    """运行时入口

    只有事件缺少URL（或配置值非法）时抛出异常，
    探测失败和通知失败都作为结果返回。
    """
    request_id = getattr(context, 'aws_request_id', None)
    logger = get_logger('handler')

    try:
        return asyncio.run(handle_event(event, request_id=request_id))
    except MalformedRequestError as e:
        logger.error(f"[req_id={request_id}] 触发事件无效: {e.format_error()}")
        raise
