"""告警模块"""

from .base import BaseAlerter
from .slack_alerter import SlackAlerter

__all__ = [
    'BaseAlerter',
    'SlackAlerter'
]
