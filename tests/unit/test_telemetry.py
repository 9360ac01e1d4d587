"""Unit tests for telemetry setup."""
from taskmanager.config import Settings
from taskmanager.telemetry import AuthEvent, TelemetryManager, record_auth_event


def _settings(**overrides) -> Settings:
    return Settings(secret_key="test-secret-key-minimum-32-characters-long", **overrides)


def test_disabled_telemetry_installs_nothing():
    manager = TelemetryManager(_settings(otel_enabled=False))
    manager.setup()

    assert manager.tracer_provider is None
    assert manager.meter_provider is None
    manager.shutdown()


def test_otlp_endpoint_paths():
    """Signal paths are appended once."""
    manager = TelemetryManager(_settings(otel_exporter_otlp_endpoint="http://collector:4318/"))
    assert manager._otlp_endpoint("/v1/traces") == "http://collector:4318/v1/traces"

    manager = TelemetryManager(
        _settings(otel_exporter_otlp_endpoint="http://collector:4318/v1/metrics")
    )
    assert manager._otlp_endpoint("/v1/metrics") == "http://collector:4318/v1/metrics"


def test_resource_includes_custom_attributes():
    manager = TelemetryManager(
        _settings(otel_service_name="tasks-test", otel_resource_attributes="team=core")
    )
    resource = manager._create_resource()

    assert resource.attributes["service.name"] == "tasks-test"
    assert resource.attributes["team"] == "core"


def test_record_auth_event_without_provider():
    """Recording works before any meter provider is installed."""
    record_auth_event(AuthEvent.LOGIN_FAILURE)
    record_auth_event(AuthEvent.TOKEN_REJECTED, reason="TokenExpiredError")
