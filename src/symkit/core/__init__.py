"""
symkit.core: infrastructure shared by every symkit module.

Modules:
    config      - SymkitConfiguration and RuleConfiguration
    logging     - SymkitLogger with MDC support, configure_loggers
    registry    - Registrant, self-registering class hierarchies
    stats       - RewriteStatistics tracking
"""

from .config import (
    ConfigConstants,
    DEFAULT_USER_DIR,
    RuleConfiguration,
    SymkitConfiguration,
)
from .logging import (
    LevelFlag,
    LoggerConfigurator,
    SymkitLogger,
    clear_logs,
    configure_loggers,
    getLogger,
)
from .registry import Registrant, Registry
from .stats import RewriteStatistics

__all__ = [
    # config
    "ConfigConstants",
    "DEFAULT_USER_DIR",
    "RuleConfiguration",
    "SymkitConfiguration",
    # logging
    "SymkitLogger",
    "getLogger",
    "configure_loggers",
    "clear_logs",
    "LoggerConfigurator",
    "LevelFlag",
    # registry
    "Registrant",
    "Registry",
    # stats
    "RewriteStatistics",
]
