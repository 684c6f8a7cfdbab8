# finalmeme/utils/__init__.py
"""Helpers shared across the application."""

from .pagination import page_links, page_url, skip_for, total_pages

__all__ = ['page_links', 'page_url', 'skip_for', 'total_pages']
