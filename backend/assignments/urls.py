from django.urls import path

from .views import AssignView, HealthView, HealthzView

urlpatterns = [
    path("assign", AssignView.as_view(), name="assign"),
    path("health", HealthView.as_view(), name="health"),
    path("healthz", HealthzView.as_view(), name="healthz"),
]
