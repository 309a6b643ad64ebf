"""
Health check, observability and auth views.
"""

from django.conf import settings
from django.http import JsonResponse
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from django.utils.decorators import method_decorator

from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from apps.core.observability import health_checker, metrics, HealthStatus
from apps.core.serializers import CustomTokenObtainPairSerializer, UserSerializer


@method_decorator(csrf_exempt, name='dispatch')
class HealthCheckView(View):
    """
    Health check endpoint.

    GET /health/ - Run all health checks
    GET /health/<check_name>/ - Run specific health check
    """

    def get(self, request, check_name=None):
        if check_name:
            result = health_checker.check(check_name)
            status_code = 200 if result.status == HealthStatus.HEALTHY else 503
            return JsonResponse({
                "status": result.status.value,
                "message": result.message,
                "details": result.details,
                "duration_ms": result.duration_ms,
            }, status=status_code)

        results = health_checker.check_all()
        status_code = 200 if results["status"] == HealthStatus.HEALTHY.value else 503
        return JsonResponse(results, status=status_code)


@method_decorator(csrf_exempt, name='dispatch')
class LivenessView(View):
    """Liveness probe: 200 while the process is serving."""

    def get(self, request):
        return JsonResponse({"status": "alive"})


@method_decorator(csrf_exempt, name='dispatch')
class ReadinessView(View):
    """Readiness probe: 200 once the database answers."""

    def get(self, request):
        db_check = health_checker.check("database")

        if db_check.status == HealthStatus.HEALTHY:
            return JsonResponse({"status": "ready"})
        return JsonResponse({
            "status": "not_ready",
            "reason": db_check.message,
        }, status=503)


@method_decorator(csrf_exempt, name='dispatch')
class MetricsView(View):
    """GET /metrics/ - in-process counters and histograms."""

    def get(self, request):
        return JsonResponse(metrics.get_all_metrics())


@method_decorator(csrf_exempt, name='dispatch')
class StatusView(View):
    """
    Application status endpoint.

    GET /status/ - collection counts plus the health summary
    """

    def get(self, request):
        from apps.articles.models import Article
        from apps.media.models import Media

        try:
            article_count = Article.objects.count()
            ready_count = Article.objects.filter(ready_for_publication=True).count()
            media_count = Media.objects.count()
        except Exception:
            article_count = ready_count = media_count = -1

        health = health_checker.check_all()

        return JsonResponse({
            "application": "LCDB Content Backend",
            "version": getattr(settings, 'VERSION', ''),
            "health": health["status"],
            "stats": {
                "articles": article_count,
                "ready_for_publication": ready_count,
                "media": media_count,
            },
            "checks": {
                name: check["status"]
                for name, check in health.get("checks", {}).items()
            },
        })


# =============================================================================
# JWT Authentication Views
# =============================================================================

class CustomTokenObtainPairView(TokenObtainPairView):
    """
    Login endpoint that returns JWT tokens.

    POST /api/auth/login/
    Body: {"username": "...", "password": "..."}
    Returns: {"access": "...", "refresh": "...", "user": {...}}
    """
    serializer_class = CustomTokenObtainPairSerializer
    permission_classes = [AllowAny]


class CustomTokenRefreshView(TokenRefreshView):
    """
    POST /api/auth/refresh/
    Body: {"refresh": "..."}
    """
    permission_classes = [AllowAny]


class CurrentUserView(APIView):
    """GET /api/auth/me/ - the authenticated editor."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)
