import pytest

from ecocycle.core.exceptions import ValidationError
from ecocycle.models.common import MAX_PAGE_SIZE, Pagination, page_offset


@pytest.mark.parametrize("page,limit,expected", [(1, 20, 0), (3, 20, 40), (2, 1, 1)])
def test_page_offset(page, limit, expected):
    assert page_offset(page, limit) == expected


@pytest.mark.parametrize("page,limit,field", [(0, 20, "page"), (1, 0, "limit"), (1, MAX_PAGE_SIZE + 1, "limit")])
def test_page_offset_rejects_out_of_range(page, limit, field):
    with pytest.raises(ValidationError) as exc_info:
        page_offset(page, limit)
    assert exc_info.value.details["field"] == field


def test_pagination_rounds_up_pages():
    assert Pagination.build(page=1, limit=20, total=41).total_pages == 3
    assert Pagination.build(page=1, limit=20, total=0).total_pages == 0
