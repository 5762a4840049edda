"""Tracing helpers built on OpenTelemetry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.trace import Tracer

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import TelemetryConfig


# One tracer per instrumentation scope, e.g. "battlenet.engine.board".
_TRACERS: dict[str, Tracer] = {}
_TRACER_PROVIDER: TracerProvider | None = None


def get_tracer(name: str = "battlenet") -> Tracer:
    """Return the tracer for the ``name`` scope, creating it on first use."""
    tracer = _TRACERS.get(name)
    if tracer is None:
        tracer = _TRACERS[name] = trace.get_tracer(name)
    return tracer


def init_tracing(config: TelemetryConfig) -> Tracer:
    """Install a TracerProvider that exports over OTLP, or to the console."""
    global _TRACER_PROVIDER

    provider = TracerProvider(resource=Resource.create(config.resource_dict()))
    if config.otlp_traces_endpoint:
        exporter = OTLPSpanExporter(endpoint=config.otlp_traces_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
    else:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)

    _TRACER_PROVIDER = provider
    _TRACERS.clear()
    _TRACERS[config.service_name] = provider.get_tracer(config.service_name)
    return _TRACERS[config.service_name]
