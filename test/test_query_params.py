from storefront.core.query import parse_query_params


def test_plain_keys_map_to_values():
    assert parse_query_params([("keyword", "iphone"), ("page", "2")]) == {
        "keyword": "iphone",
        "page": "2",
    }


def test_bracket_keys_nest_under_field():
    params = parse_query_params(
        [("price[gte]", "100"), ("price[lte]", "1000"), ("category", "Electronics")]
    )
    assert params == {"price": {"gte": "100", "lte": "1000"}, "category": "Electronics"}


def test_repeated_plain_key_keeps_last_value():
    assert parse_query_params([("category", "Books"), ("category", "Toys")]) == {"category": "Toys"}


def test_bracket_form_wins_over_plain_value():
    assert parse_query_params([("price", "5"), ("price[gt]", "1")]) == {"price": {"gt": "1"}}
    assert parse_query_params([("price[gt]", "1"), ("price", "5")]) == {"price": {"gt": "1"}}


def test_malformed_brackets_stay_literal_keys():
    params = parse_query_params([("price[]", "1"), ("a[b][c]", "2")])
    assert params == {"price[]": "1", "a[b][c]": "2"}


def test_empty_input():
    assert parse_query_params([]) == {}
