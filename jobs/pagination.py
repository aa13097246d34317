import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from .constants import PUBLIC_MAX_PAGE_SIZE, PUBLIC_PAGE_SIZE


class PagePagination(PageNumberPagination):
    """
    ?page=<n>&limit=<size>, answered as
    {"results": [...], "pagination": {page, limit, total, total_pages}}.
    """
    page_size = 10
    page_size_query_param = 'limit'
    max_page_size = 50

    def get_paginated_response(self, data):
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return Response({
            "results": data,
            "pagination": {
                "page": self.page.number,
                "limit": limit,
                "total": total,
                "total_pages": math.ceil(total / limit) if limit else 0,
            },
        })


class PublicJobOfferPagination(PagePagination):
    page_size = PUBLIC_PAGE_SIZE
    max_page_size = PUBLIC_MAX_PAGE_SIZE


class MeetingPagination(PagePagination):
    page_size = 20
    max_page_size = 100
