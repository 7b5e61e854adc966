import time

from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


class HealthCheckView(APIView):
    """
    GET /api/health/

    Uptime probe. Also advertises the presence timings clients should use.
    """
    permission_classes = [AllowAny]
    authentication_classes = []  # public endpoint

    def get(self, request, *args, **kwargs):
        start = time.time()

        db_ok = True
        try:
            connections["default"].cursor()
        except OperationalError:
            db_ok = False

        return Response(
            {
                "status": "ok" if db_ok else "degraded",
                "db": db_ok,
                "env": getattr(settings, "ENV", "unknown"),
                "latency_ms": int((time.time() - start) * 1000),
                "presence": {
                    "heartbeat_seconds": settings.PRESENCE_HEARTBEAT_INTERVAL_SECONDS,
                    "stale_after_seconds": settings.PRESENCE_STALE_AFTER_SECONDS,
                },
            }
        )
