"""Telemetry module for OpenTelemetry instrumentation."""
from taskmanager.telemetry.instrumentation import (
    AuthEvent,
    TelemetryManager,
    record_auth_event,
)

__all__ = [
    "TelemetryManager",
    "AuthEvent",
    "record_auth_event",
]
