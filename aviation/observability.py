import logging
import os

from dotenv import load_dotenv
from opentelemetry import trace as trace_api
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)


def setup_tracing(service_name: str = "aviation-scheduler") -> bool:
    """Set up OpenTelemetry tracing when an OTLP endpoint is configured."""
    load_dotenv()

    if not os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT"):
        logger.warning(
            "OTEL_EXPORTER_OTLP_ENDPOINT not configured. Tracing will be disabled."
        )
        return False

    try:
        tracer_provider = TracerProvider(
            resource=Resource.create({"service.name": service_name})
        )
        tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
        trace_api.set_tracer_provider(tracer_provider=tracer_provider)

        logger.info("OpenTelemetry tracing set up successfully")
        return True

    except Exception as e:
        logger.error(f"Failed to set up tracing: {e}")
        return False


def get_tracer(name: str = __name__):
    """Get a tracer instance for manual instrumentation."""
    return trace_api.get_tracer(name)
