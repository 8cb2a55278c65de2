"""数据模型模块"""

from .config import ProbeConfig
from .health_check import (
    HealthCheckRequest, OutcomeKind, ProbeOutcome, AlertMessage,
    InvocationState, InvocationResult, ALERTABLE_KINDS
)

__all__ = ['ProbeConfig', 'HealthCheckRequest', 'OutcomeKind', 'ProbeOutcome',
           'AlertMessage', 'InvocationState', 'InvocationResult', 'ALERTABLE_KINDS']
