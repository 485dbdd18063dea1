"""Health check endpoints for liveness and readiness probes."""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from registry.stores import get_store

logger = logging.getLogger(__name__)


@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    Report whether the configured record store is reachable.

    Returns:
        200 OK: Service is healthy
        503 Service Unavailable: The record store cannot be reached
    """
    store = get_store()
    health_status = {"status": "healthy", "checks": {"store": store.name}}

    if store.ping():
        health_status["checks"]["store_connection"] = "ok"
    else:
        logger.error(f"Record store health check failed ({store.name})")
        health_status["checks"]["store_connection"] = "error"
        health_status["status"] = "unhealthy"

    if health_status["status"] == "healthy":
        return Response(health_status, status=status.HTTP_200_OK)
    else:
        return Response(health_status, status=status.HTTP_503_SERVICE_UNAVAILABLE)


@api_view(["GET"])
@permission_classes([AllowAny])
def readiness_check(request):
    """Readiness check: the application is up and serving requests."""
    return Response({"status": "ready"}, status=status.HTTP_200_OK)
