"""
Error taxonomy shared by every organizer app and the DRF exception handler
that renders it as ``{"error": ..., "code": ...}``.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class NotFoundOrForbidden(APIException):
    """Record is absent or owned by someone else; callers cannot tell which"""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Record not found or access denied'
    default_code = 'not_found_or_forbidden'

    def __init__(self, entity='Record'):
        super().__init__(detail=f'{entity} not found or access denied')


class MissingCredential(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Gemini API key not configured. Please set it in Settings.'
    default_code = 'missing_credential'


class UpstreamError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Failed to generate AI suggestion. Please check your API key and try again.'
    default_code = 'upstream_error'


class EmptyResponse(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'No suggestion received from AI. Please try again.'
    default_code = 'empty_response'


def organizer_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        request = context.get('request')
        logger.error(f"Unhandled error on {getattr(request, 'path', '?')}: {str(exc)}", exc_info=exc)
        set_rollback()
        return Response({'error': 'An unexpected error occurred'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # Field errors keep DRF's shape so forms can map them back to inputs
    if isinstance(exc, ValidationError):
        return response

    if isinstance(exc, APIException):
        detail = exc.detail
        if isinstance(detail, (list, dict)):
            return response
        response.data = {
            'error': str(detail),
            'code': getattr(detail, 'code', None) or exc.default_code,
        }
        if response.status_code >= 500:
            logger.error(f"{exc.__class__.__name__}: {detail}")
        elif response.status_code == status.HTTP_404_NOT_FOUND:
            logger.warning(f"{exc.__class__.__name__}: {detail}")
    return response
