# api/pagination.py

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """
    ?page=<n>&limit=<size> on every list endpoint.
    """
    page_size = 10
    page_size_query_param = 'limit'
    max_page_size = 100
