from .pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginatedResult, Pagination

__all__ = ["DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "PaginatedResult", "Pagination"]
