import pytest

from manyrows import PageRequest, QueryRequest
from manyrows.paging import DEFAULT_PAGE_SIZE


@pytest.mark.parametrize("size", [0, -1, 101, 1000])
def test_size_out_of_range_uses_default(size):
    assert PageRequest(size=size).effective_size == DEFAULT_PAGE_SIZE == 50


@pytest.mark.parametrize("size", [1, 20, 100])
def test_size_in_range_passes_through(size):
    assert PageRequest(size=size).effective_size == size


def test_unset_size_uses_default():
    assert PageRequest().effective_size == 50


def test_negative_page_clamped_to_zero():
    assert PageRequest(page=-4).effective_page == 0
    assert PageRequest(page=3).effective_page == 3


def test_limit_and_offset():
    page = PageRequest(page=3, size=20)
    assert page.limit == 20
    assert page.offset == 60


def test_offset_uses_clamped_values():
    assert PageRequest(page=-2, size=20).offset == 0
    assert PageRequest(page=2, size=500).offset == 100


def test_query_request_sends_effective_page():
    payload = QueryRequest(page=-1, size=0).to_payload()
    assert payload["page"] == 0
    assert payload["size"] == 50
