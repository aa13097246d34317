import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


def api_exception_handler(exc, context):
    """
    Give every error body a top-level "message".

    Field errors from serializers are kept under "errors". Anything DRF does
    not know how to handle is logged and turned into a plain 500.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else 'unknown view',
                         exc_info=exc)
        return Response({"message": "Internal server error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    data = response.data
    if isinstance(data, dict) and 'detail' in data:
        extra = {key: value for key, value in data.items() if key != 'detail'}
        response.data = {"message": str(data['detail']), **extra}
    elif isinstance(data, dict) and 'message' not in data:
        response.data = {"message": "Validation failed", "errors": data}
    elif isinstance(data, list):
        response.data = {"message": " ".join(str(item) for item in data), "errors": data}

    return response
