"""探测器模块"""

from .base import BaseProber
from .http_prober import HTTPProber, classify_status

__all__ = ['BaseProber', 'HTTPProber', 'classify_status']
