from dataclasses import dataclass, field

from django.conf import settings
from django.core.paginator import Paginator

MAX_PAGE_LINKS = 5


@dataclass
class PageResult:
    """One page of rows plus the filtered total, shaped for the list templates."""

    rows: list
    total: int
    page: int
    limit: int
    num_pages: int = field(init=False)

    def __post_init__(self):
        self.num_pages = max(1, -(-self.total // self.limit)) if self.limit else 1

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)

    @property
    def start_index(self):
        return 0 if self.total == 0 else (self.page - 1) * self.limit + 1

    @property
    def end_index(self):
        return min(self.page * self.limit, self.total)

    @property
    def has_previous(self):
        return self.page > 1

    @property
    def has_next(self):
        return self.page < self.num_pages

    @property
    def page_numbers(self):
        return list(range(1, min(self.num_pages, MAX_PAGE_LINKS) + 1))

    @property
    def truncated(self):
        return self.num_pages > MAX_PAGE_LINKS


def parse_page(value):
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 1
    return page if page > 0 else 1


def paginate(queryset, page=1, limit=None):
    limit = limit or getattr(settings, "DASHBOARD_PAGE_SIZE", 25)
    paginator = Paginator(queryset, limit)
    page_obj = paginator.get_page(parse_page(page))
    return PageResult(
        rows=list(page_obj.object_list),
        total=paginator.count,
        page=page_obj.number,
        limit=limit,
    )
