"""OpenTelemetry tracing for the API and its database.

Built from Settings (TELEMETRY_*). Console exporter for development, OTLP
(gRPC) for collectors such as Jaeger or Tempo, or none to keep spans
in-process. Health checks and static attachment downloads are not traced.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from noticeboard.core.config import Settings

logger = logging.getLogger(__name__)

# Regexes matched against the request URL by FastAPIInstrumentor.
UNTRACED_URLS = "/api/v1/health,/files/"


def build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Return the span exporter for exporter_type, or None for "none".

    "otlp" without an endpoint and unknown types fall back to the console.
    """
    if exporter_type == "none":
        return None
    if exporter_type == "otlp" and otlp_endpoint:
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if exporter_type != "console":
        logger.warning(
            "Exporter '%s' unusable (endpoint=%s), using console", exporter_type, otlp_endpoint
        )
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus FastAPI and SQLAlchemy instrumentation."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.exporter_type = exporter_type
        self.otlp_endpoint = otlp_endpoint
        self.sample_rate = sample_rate
        self.tracer_provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> TelemetryConfig:
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )

    def build_provider(self) -> TracerProvider:
        """Create the tracer provider. Children follow the sampling decision of their parent."""
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        provider = TracerProvider(
            resource=resource, sampler=ParentBased(TraceIdRatioBased(self.sample_rate))
        )
        exporter = build_exporter(self.exporter_type, self.otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        return provider

    def instrument(self, app: FastAPI, engine: AsyncEngine) -> None:
        """Install the global tracer provider and instrument the app and engine.

        Must run before the middleware stack is built (first request).
        Failures are logged; the API serves untraced.
        """
        try:
            self.tracer_provider = self.build_provider()
            trace.set_tracer_provider(self.tracer_provider)
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.tracer_provider, excluded_urls=UNTRACED_URLS
            )
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine,
                tracer_provider=self.tracer_provider,
                enable_commenter=True,
            )
        except Exception:
            logger.exception("Tracing not enabled")
            return
        logger.info(
            "Tracing enabled: service=%s version=%s exporter=%s sample_rate=%s",
            self.service_name,
            self.service_version,
            self.exporter_type,
            self.sample_rate,
        )

    def shutdown(self) -> None:
        """Flush remaining spans."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error flushing spans on shutdown")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the telemetry installed at startup, if any."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
