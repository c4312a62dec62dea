"""
Pagination

Offset/size paging used by listing endpoints. The page index is
``from_index // size``, so an offset that is not a multiple of the size
snaps back to the start of its page.
"""

from dataclasses import dataclass

from shared.domain.exceptions import DomainValidationError

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class PageRequest:
    """
    Requested window of a sorted result set

    Raises:
        DomainValidationError: If from_index is negative or size is not positive
    """
    from_index: int = 0
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.from_index < 0:
            raise DomainValidationError("'from' must be positive or zero")
        if self.size <= 0:
            raise DomainValidationError("'size' must be positive")

    @property
    def page_number(self) -> int:
        return self.from_index // self.size

    @property
    def offset(self) -> int:
        return self.page_number * self.size

    @property
    def limit(self) -> int:
        return self.offset + self.size

    def slice(self, rows):
        """Apply the window to a sequence or queryset"""
        return rows[self.offset:self.limit]
