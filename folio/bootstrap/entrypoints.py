"""
bootstrap/entrypoints.py - Entry points

Logging setup driven by LoggingConfig, bridge wiring for host applications,
and a CLI that renders or validates a saved editor snapshot.
"""

from __future__ import annotations
from typing import Any, Optional, TYPE_CHECKING
import argparse
import json
import logging
import sys

from folio.adapters.sources import RecordSource, SnapshotSource, StoreSource
from folio.bootstrap.config import BridgeConfig, LoggingConfig, get_config, load_config

if TYPE_CHECKING:
    from folio.core.store import EditorStore
    from folio.transfer.orchestrator import TransferFunction, TransferOrchestrator

logger = logging.getLogger("bootstrap.entrypoints")

# Marks handlers installed here so a second setup replaces them.
_HANDLER_TAG = "_folio_handler"


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record):
        entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    level: str = "INFO",
    log_file: str = None,
    json_format: bool = False,
    fmt: str = None,
) -> None:
    """
    Configure application logging.

    Calling it again replaces the handlers a previous call installed.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
        fmt: Plain-text format string (ignored for JSON)
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt or LoggingConfig().format)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        setattr(handler, _HANDLER_TAG, True)
        root_logger.addHandler(handler)

    root_logger.setLevel(log_level)


def configure_logging(logging_config: LoggingConfig, level: Optional[str] = None) -> None:
    """Apply a LoggingConfig; level overrides the configured level."""
    setup_logging(
        level=level or logging_config.level,
        log_file=logging_config.log_file,
        json_format=logging_config.json_logs,
        fmt=logging_config.format,
    )


def select_source(
    store: Optional["EditorStore"] = None,
    containers: Any = None,
    paragraphs: Any = None,
) -> RecordSource:
    """StoreSource when a store is given, otherwise a snapshot of the lists."""
    if store is not None:
        if containers is not None or paragraphs is not None:
            logger.warning("Both a store and record lists were given, using the store")
        return StoreSource(store)
    return SnapshotSource(
        containers if containers is not None else (),
        paragraphs if paragraphs is not None else (),
    )


def create_bridge(
    transfer_fn: "TransferFunction",
    store: Optional["EditorStore"] = None,
    containers: Any = None,
    paragraphs: Any = None,
    config: Optional[BridgeConfig] = None,
    init_logging: bool = False,
) -> "TransferOrchestrator":
    """
    Wire a transfer orchestrator.

    Args:
        transfer_fn: Async callable receiving the TransferPayload
        store: Shared editor store to read from
        containers: Container snapshot, used when no store is given
        paragraphs: Paragraph snapshot, used when no store is given
        config: Bridge configuration (global config when omitted)
        init_logging: Install handlers from config.logging

    Returns:
        TransferOrchestrator
    """
    from folio.transfer.orchestrator import TransferOrchestrator

    config = config if config is not None else get_config()
    if init_logging:
        configure_logging(config.logging, level="DEBUG" if config.debug_mode else None)

    source = select_source(store, containers, paragraphs)

    logger.info(f"Bridge created over {type(source).__name__}")
    return TransferOrchestrator(source, transfer_fn, config=config)


def cli_main(args: list = None) -> int:
    """
    CLI entry point.

    Reads a JSON snapshot ({"containers": [...], "paragraphs": [...]}) and
    prints the generated document, or the validation report with --validate.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code: 0 ok, 1 not ready (with --validate), 2 unreadable input
    """
    parser = argparse.ArgumentParser(
        description="Render or validate a folio editor snapshot",
        prog="folio",
    )
    parser.add_argument(
        "snapshot",
        help="Path to snapshot JSON file",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Print the validation report instead of the document",
    )

    parsed = parser.parse_args(args)

    config = load_config(parsed.config)
    configure_logging(config.logging, level="DEBUG" if parsed.verbose else None)

    try:
        with open(parsed.snapshot) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read snapshot {parsed.snapshot}: {e}")
        return 2

    if not isinstance(data, dict):
        logger.error(f"Snapshot {parsed.snapshot} is not a JSON object")
        return 2

    source = SnapshotSource(data.get("containers", []), data.get("paragraphs", []))
    containers, paragraphs = source.get_containers(), source.get_paragraphs()

    if parsed.validate:
        from folio.validation.engine import validate

        report = validate(containers, paragraphs)
        print(json.dumps(report.to_dict(), indent=2))
        return 0 if report.is_ready else 1

    from folio.content.generator import generate_content

    print(generate_content(containers, paragraphs))
    return 0
