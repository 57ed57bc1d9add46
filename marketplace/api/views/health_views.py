"""
Health Check Endpoint

Readiness probe used by the load balancer and container orchestrator.
"""

import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse


logger = logging.getLogger(__name__)


def health_check(request):
    """
    Report whether the service can reach its database.

    Returns:
        JsonResponse: {"status": "ok", "checks": {...}} with 200, or
        {"status": "unavailable", ...} with 503 when a dependency is down.
    """
    checks = {"database": check_database()}

    all_ok = all(checks.values())
    status_code = 200 if all_ok else 503

    return JsonResponse({"status": "ok" if all_ok else "unavailable", "checks": checks}, status=status_code)


def check_database():
    try:
        connection.ensure_connection()
        return True
    except DatabaseError as e:
        logger.error(f"Database health check failed: {e}")
        return False
