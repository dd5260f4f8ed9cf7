from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator

def instrument_app(app):
    """
    Instruments the FastAPI application with Prometheus metrics.
    Each app gets its own registry so several apps can live in one process.
    """
    Instrumentator(registry=CollectorRegistry()).instrument(app).expose(app, include_in_schema=False)
