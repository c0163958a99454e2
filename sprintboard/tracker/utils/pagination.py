# -*- coding: utf-8 -*-
from django.conf import settings
from rest_framework.pagination import PageNumberPagination


class TrackerPagination(PageNumberPagination):
    page_query_param = "page"
    page_size_query_param = "page_size"

    def __init__(self):
        self.page_size = getattr(settings, "TRACKER_PAGE_SIZE", 50)
        self.max_page_size = getattr(settings, "TRACKER_MAX_PAGE_SIZE", 200)
