from django.urls import include, path

urlpatterns = [
    path("", include("assignments.urls")),
]

handler404 = "assignments.views.not_found"
