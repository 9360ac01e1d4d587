"""OpenTelemetry instrumentation setup."""

import logging
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricExporter,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.semconv.resource import ResourceAttributes

from taskmanager.config import Settings

logger = logging.getLogger(__name__)

METER_NAME = "taskmanager"


class AuthEvent:
    """Values of the ``event`` attribute on the auth counter."""

    REGISTER = "register"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILURE = "login_failure"
    LOGOUT = "logout"
    TOKEN_REJECTED = "token_rejected"


# Proxy instruments bind to whichever meter provider is installed later
_meter = metrics.get_meter(METER_NAME)
_auth_events = _meter.create_counter(
    "auth.events",
    unit="1",
    description="Authentication events by outcome",
)


def record_auth_event(event: str, **attributes: Any) -> None:
    """Count an authentication event."""
    _auth_events.add(1, {"event": event, **{k: str(v) for k, v in attributes.items()}})


class TelemetryManager:
    """Manages OpenTelemetry instrumentation."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.tracer_provider: TracerProvider | None = None
        self.meter_provider: MeterProvider | None = None

    def setup(self) -> None:
        """Initialize OpenTelemetry instrumentation."""
        if not self.settings.otel_enabled:
            logger.info("OpenTelemetry is disabled")
            return

        logger.info("Initializing OpenTelemetry instrumentation")

        resource = self._create_resource()
        self._setup_tracing(resource)
        self._setup_metrics(resource)

        logger.info("OpenTelemetry instrumentation initialized successfully")

    def _create_resource(self) -> Resource:
        """Create resource with service attributes."""
        attributes = {
            ResourceAttributes.SERVICE_NAME: self.settings.otel_service_name,
            ResourceAttributes.DEPLOYMENT_ENVIRONMENT: self.settings.environment,
        }
        attributes.update(self.settings.get_resource_attributes())
        return Resource.create(attributes)

    def _otlp_endpoint(self, path: str) -> str:
        """Append the signal path unless the endpoint already carries it."""
        endpoint = self.settings.otel_exporter_otlp_endpoint.rstrip("/")
        if endpoint.endswith(path):
            return endpoint
        return f"{endpoint}{path}"

    def _setup_tracing(self, resource: Resource) -> None:
        """Setup trace provider and exporters."""
        self.tracer_provider = TracerProvider(resource=resource)

        if self.settings.otel_traces_exporter == "otlp":
            otlp_exporter = OTLPSpanExporter(
                endpoint=self._otlp_endpoint("/v1/traces"),
                headers=self.settings.get_otlp_headers(),
            )
            self.tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
            logger.info(
                f"OTLP trace exporter configured: {self.settings.otel_exporter_otlp_endpoint}"
            )
        elif self.settings.otel_traces_exporter == "console":
            self.tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
            logger.info("Console trace exporter configured")

        trace.set_tracer_provider(self.tracer_provider)

    def _setup_metrics(self, resource: Resource) -> None:
        """Setup meter provider and exporters."""
        exporter: MetricExporter | None = None
        if self.settings.otel_metrics_exporter == "otlp":
            exporter = OTLPMetricExporter(
                endpoint=self._otlp_endpoint("/v1/metrics"),
                headers=self.settings.get_otlp_headers(),
            )
            logger.info(
                f"OTLP metric exporter configured: {self.settings.otel_exporter_otlp_endpoint}"
            )
        elif self.settings.otel_metrics_exporter == "console":
            exporter = ConsoleMetricExporter()
            logger.info("Console metric exporter configured")

        if exporter is None:
            self.meter_provider = MeterProvider(resource=resource)
        else:
            reader = PeriodicExportingMetricReader(exporter, export_interval_millis=60000)
            self.meter_provider = MeterProvider(resource=resource, metric_readers=[reader])

        metrics.set_meter_provider(self.meter_provider)

    def shutdown(self) -> None:
        """Shutdown telemetry providers."""
        if self.tracer_provider:
            self.tracer_provider.shutdown()
        if self.meter_provider:
            self.meter_provider.shutdown()
        logger.info("OpenTelemetry shutdown complete")
