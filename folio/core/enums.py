"""
folio Core Enumerations

All enumeration types used throughout the bridge.
"""

from enum import Enum


class TransferState(str, Enum):
    """
    States of the transfer state machine.

    SUCCEEDED and FAILED are transient and revert to IDLE on a timer.
    """
    IDLE = "idle"            # Nothing in flight
    RUNNING = "running"      # Transfer function is being awaited
    SUCCEEDED = "succeeded"  # Last transfer completed
    FAILED = "failed"        # Last transfer raised, timed out or was rejected


class MoveDirection(str, Enum):
    """Direction for moving a paragraph inside its container."""
    UP = "up"
    DOWN = "down"
