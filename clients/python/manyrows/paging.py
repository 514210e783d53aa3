"""Page request and page resource models."""

from dataclasses import dataclass
from typing import Any

DEFAULT_PAGE_SIZE = 50
FIRST_PAGE = 0
MAX_PAGE_SIZE = 100
MIN_PAGE_SIZE = 1


@dataclass
class PageRequest:
    """Requested page index and size.

    ``page`` and ``size`` hold what the caller asked for. The effective
    values clamp the index to zero or above and fall back to
    ``DEFAULT_PAGE_SIZE`` for sizes outside ``[MIN_PAGE_SIZE, MAX_PAGE_SIZE]``.

    Example:
        >>> PageRequest(page=-3, size=500).effective_size
        50
    """

    page: int = FIRST_PAGE
    size: int = 0

    @property
    def effective_page(self) -> int:
        if self.page < FIRST_PAGE:
            return FIRST_PAGE
        return self.page

    @property
    def effective_size(self) -> int:
        if self.size < MIN_PAGE_SIZE or self.size > MAX_PAGE_SIZE:
            return DEFAULT_PAGE_SIZE
        return self.size

    @property
    def limit(self) -> int:
        return self.effective_size

    @property
    def offset(self) -> int:
        return self.effective_page * self.effective_size

    def page_payload(self) -> dict[str, int]:
        return {"page": self.effective_page, "size": self.effective_size}


@dataclass
class PageResource(PageRequest):
    """A page as reported by the API, with the total item count."""

    total: int = 0

    @classmethod
    def page_fields(cls, response: dict[str, Any]) -> dict[str, int]:
        """Extract the page/size/total keys of a paged response."""
        return {
            "page": response.get("page") or FIRST_PAGE,
            "size": response.get("size") or 0,
            "total": response.get("total") or 0,
        }
