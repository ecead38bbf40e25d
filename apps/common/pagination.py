from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    """Default pagination for list endpoints (?page=&limit=)."""
    page_size = 20
    page_size_query_param = 'limit'
    max_page_size = 100
