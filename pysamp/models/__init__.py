"""
pysamp Models - server metadata and handshake outcomes
"""

from .connection_result import ConnectionOutcome, OutcomeState
from .server_info import ServerInfo

__all__ = ['ConnectionOutcome', 'OutcomeState', 'ServerInfo']
