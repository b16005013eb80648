"""
Error handling middleware for API requests
"""

import logging
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(MiddlewareMixin):
    """
    Turns unhandled exceptions on API paths into a generic JSON 500
    """

    def process_exception(self, request, exception):
        logger.error(
            f"Unhandled {type(exception).__name__} in {request.method} {request.path}: {exception}",
            exc_info=True
        )

        if request.path.startswith('/api/'):
            return JsonResponse({
                'code': 500,
                'msg': 'Internal server error, please try again later',
                'data': None
            }, status=500)

        return None  # Let Django handle non-API errors normally
