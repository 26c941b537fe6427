"""
bootstrap/ - Configuration, logging setup and wiring
"""

from .config import (
    BridgeConfig,
    LoggingConfig,
    load_config,
    get_config,
)

from .entrypoints import (
    JSONFormatter,
    setup_logging,
    configure_logging,
    select_source,
    create_bridge,
    cli_main,
)


__all__ = [
    # Config
    "BridgeConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    # Entry Points
    "JSONFormatter",
    "setup_logging",
    "configure_logging",
    "select_source",
    "create_bridge",
    "cli_main",
]
