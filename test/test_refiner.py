import pytest

from storefront.core.query import QueryRefiner, parse_page


class RecordingQuery:
    """Refinable query that records each refinement instead of touching a store."""

    def __init__(self, calls=()):
        self.calls = tuple(calls)

    def _with(self, *call):
        return RecordingQuery(self.calls + (call,))

    def with_text_match(self, field, substring):
        return self._with("text", field, substring)

    def with_filters(self, predicate):
        return self._with("filters", dict(predicate))

    def skip(self, count):
        return self._with("skip", count)

    def limit(self, count):
        return self._with("limit", count)

    def execute(self):
        return list(self.calls)

    def count(self):
        return len(self.calls)


@pytest.fixture
def base():
    return RecordingQuery()


def test_search_without_keyword_is_a_no_op(base):
    refiner = QueryRefiner(base, {"category": "Books"})
    assert refiner.search() is refiner
    assert refiner.search().query is base


def test_search_with_empty_keyword_is_a_no_op(base):
    assert QueryRefiner(base, {"keyword": ""}).search().query is base


def test_search_matches_on_name(base):
    query = QueryRefiner(base, {"keyword": "abc"}).search().query
    assert query.calls == (("text", "name", "abc"),)


def test_filter_excludes_reserved_keys(base):
    params = {"keyword": "x", "page": "2", "limit": "50", "category": "Electronics"}
    refiner = QueryRefiner(base, params).filter()
    assert refiner.predicate == {"category": "Electronics"}
    assert not {"keyword", "page", "limit"} & set(refiner.predicate)


def test_filter_prefixes_range_operators(base):
    refiner = QueryRefiner(base, {"price": {"gte": 100, "lte": 1000}}).filter()
    assert refiner.predicate["price"]["$gte"] == 100
    assert refiner.predicate["price"]["$lte"] == 1000


def test_filter_coerces_numeric_strings_in_ranges(base):
    refiner = QueryRefiner(base, {"ratings": {"gte": "4"}, "price": {"lt": "99.99"}}).filter()
    assert refiner.predicate == {"ratings": {"$gte": 4}, "price": {"$lt": 99.99}}


def test_filter_without_params_leaves_query_untouched(base):
    assert QueryRefiner(base, {"page": "1"}).filter().query is base


def test_filter_is_idempotent(base):
    params = {"category": "Electronics", "price": {"gte": "100"}}
    once = QueryRefiner(base, params).filter()
    twice = once.filter()
    assert once.predicate == twice.predicate
    assert once.query.calls == twice.query.calls


def test_pagination_skips_whole_pages(base):
    query = QueryRefiner(base, {"page": "3"}).pagination(12).query
    assert query.calls == (("skip", 24), ("limit", 12))


def test_first_page_has_no_skip(base):
    assert QueryRefiner(base, {}).pagination(12).query.calls == (("limit", 12),)


@pytest.mark.parametrize("page", ["0", "-4", "abc", "", "2.5", None, True])
def test_invalid_page_means_first_page(base, page):
    query = QueryRefiner(base, {"page": page}).pagination(12).query
    assert query.calls == (("limit", 12),)


@pytest.mark.parametrize("raw, expected", [(1, 1), ("7", 7), (" 2 ", 2), (0, 1), ("x", 1)])
def test_parse_page(raw, expected):
    assert parse_page(raw) == expected


def test_refinements_apply_in_fixed_order(base):
    params = {"keyword": "phone", "category": "Electronics", "page": "2"}
    query = QueryRefiner(base, params).pagination(12).filter().search().query
    assert [call[0] for call in query.calls] == ["text", "filters", "skip", "limit"]


def test_each_step_returns_a_new_refiner(base):
    params = {"keyword": "phone", "category": "Electronics", "page": "2"}
    filtered = QueryRefiner(base, params).search().filter()
    paged = filtered.pagination(12)

    assert paged is not filtered
    assert filtered.refinement.limit is None
    assert filtered.count() == 2
    assert paged.count() == 4
