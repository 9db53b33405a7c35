import logging

from django.conf import settings
from django.http import JsonResponse
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.response import Response
from rest_framework.views import APIView

from dispatch.dispatcher import Dispatcher

from .parsers import AnyMediaJSONParser
from .serializers import AssignRequestSerializer, DispatchResultSerializer

logger = logging.getLogger(__name__)

INVALID_PAYLOAD = {"error": "invalid payload"}
NOT_FOUND = {"error": "not found"}


class DispatchAPIView(APIView):
    """
    Unsupported methods fall through to the JSON 404, like unknown routes.
    """

    def http_method_not_allowed(self, request, *args, **kwargs):
        return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)


class AssignView(DispatchAPIView):
    """
    One scoring cycle: snapshot in, assignment list out.
    Nothing is persisted, so callers may retry freely.
    """
    parser_classes = [AnyMediaJSONParser]

    def post(self, request):
        try:
            payload = request.data
        except ParseError as exc:
            logger.warning("Rejected /assign body: %s", exc)
            return Response(INVALID_PAYLOAD, status=status.HTTP_400_BAD_REQUEST)

        # A literal JSON null has no collections to read
        if payload is None:
            logger.warning("Rejected /assign body: null")
            return Response(INVALID_PAYLOAD, status=status.HTTP_400_BAD_REQUEST)

        serializer = AssignRequestSerializer(data=payload or {})
        if not serializer.is_valid():
            logger.warning("Rejected /assign payload: %s", serializer.errors)
            return Response(INVALID_PAYLOAD, status=status.HTTP_400_BAD_REQUEST)

        dispatcher = Dispatcher(getattr(settings, "DISPATCH_POLICY", None))
        result = dispatcher.dispatch(serializer.to_snapshot())

        return Response(DispatchResultSerializer(result).data)


class HealthView(DispatchAPIView):
    """Liveness probe."""

    def get(self, request):
        return Response({"ok": True, "service": "dispatch"})


class HealthzView(DispatchAPIView):
    """Diagnostic probe that echoes its query parameters."""

    def get(self, request):
        return Response({"ok": True, "query": request.query_params.dict()})


def not_found(request, exception=None):
    return JsonResponse(NOT_FOUND, status=404)
