import pytest

from app.errors import ValidationError
from app.services.assembler import MAX_PAGE, MAX_PAGE_SIZE, page_window


def test_page_window_offsets():
    assert page_window(1, 50) == (0, 50)
    assert page_window(3, 20) == (40, 20)


def test_page_window_caps_limit():
    assert page_window(2, 10_000) == (MAX_PAGE_SIZE, MAX_PAGE_SIZE)


@pytest.mark.parametrize("page,limit", [(0, 10), (MAX_PAGE + 1, 10), (10**20, 10), (1, 0)])
def test_page_window_rejects_out_of_range(page, limit):
    with pytest.raises(ValidationError):
        page_window(page, limit)
