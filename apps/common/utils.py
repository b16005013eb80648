"""
Common utility functions for API responses and money handling
"""
from decimal import Decimal, ROUND_HALF_UP

from rest_framework.response import Response
from rest_framework import status

MONEY_QUANTUM = Decimal('0.01')


def to_money(value) -> Decimal:
    """Quantize an amount to two decimal places (ROUND_HALF_UP)"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def success_response(data=None, message="Success", status_code=status.HTTP_200_OK):
    """
    Standard success response format
    """
    response_data = {
        "code": 200,
        "msg": message,
        "data": data
    }
    return Response(response_data, status=status_code)


def error_response(message="Error", errors=None, status_code=status.HTTP_400_BAD_REQUEST):
    """
    Standard error response format
    """
    response_data = {
        "code": status_code,
        "msg": message
    }
    if errors:
        response_data["errors"] = errors
    return Response(response_data, status=status_code)


def parse_page_params(request, default_size=20, max_size=100):
    """
    Read page/limit query parameters.

    Returns (page, limit) or raises ValueError for non-numeric or
    out-of-range values.
    """
    page = int(request.GET.get('page', 1))
    limit = int(request.GET.get('limit', default_size))
    if page < 1:
        raise ValueError("page must be a positive integer")
    if limit < 1 or limit > max_size:
        raise ValueError(f"limit must be between 1 and {max_size}")
    return page, limit


def page_info(page, limit, total):
    """Pagination block used by list endpoints"""
    return {
        "pageNum": page,
        "pageSize": limit,
        "total": total,
        "totalPages": (total + limit - 1) // limit if limit else 0,
    }
