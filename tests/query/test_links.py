from urllib.parse import parse_qsl, unquote, urlsplit

from omnex_backend.query import (
    apply_overrides,
    build_api_link,
    build_link,
    build_nav_link,
    build_page_link,
    build_pretty_link,
    decode_query,
    parse_pretty_path,
)
from omnex_shared import OutputFormat


def _query(url):
    return dict(parse_qsl(urlsplit(url).query, keep_blank_values=True))


def test_reencoding_unmodified_state_is_equivalent(assets):
    params = {"folder": "Images,Models", "type": "png,jpg", "color": "00ff00", "page": "2"}
    state = decode_query(params, assets)
    assert _query(build_link(state.params, {})) == params


def test_overrides_replace_and_delete():
    params = {"view": "a", "type": "png", "page": "3"}
    assert apply_overrides(params, {"view": None, "type": "jpg"}) == {"type": "jpg", "page": "3"}
    assert apply_overrides(params, {"missing": None}) == params


def test_build_link_is_order_independent_and_idempotent():
    params = [("b", "2"), ("a", "1")]
    one = build_link(params, {"c": "3", "a": None})
    two = build_link(list(reversed(params)), {"a": None, "c": "3"})
    assert one == two == "?b=2&c=3"
    again = build_link(_query(one).items(), {"c": "3", "a": None})
    assert again == one


def test_nav_link_drops_format_and_page(assets):
    state = decode_query({"format": "json", "page": "4", "view": "Images", "type": "png"}, assets)
    link = build_nav_link(state, base="/omnex/browse")
    assert link.startswith("/omnex/browse?")
    assert _query(link) == {"view": "Images", "type": "png"}


def test_nav_link_empty_values_delete_keys(assets):
    state = decode_query({"view": "Images", "type": "png"}, assets)
    assert _query(build_nav_link(state, view="", type_="")) == {}
    assert _query(build_nav_link(state, view="Models", color="abcdef")) == {
        "view": "Models",
        "type": "png",
        "color": "abcdef",
    }


def test_page_link_sets_page(assets):
    state = decode_query({"view": "Images", "page": "2"}, assets)
    assert _query(build_page_link(state, 3)) == {"view": "Images", "page": "3"}
    assert _query(build_page_link(state, 0))["page"] == "1"


def test_api_link_sets_format(assets):
    state = decode_query({"view": "Images", "format": "html"}, assets)
    link = build_api_link(state, OutputFormat.CSV, endpoint="/omnex/browse")
    assert link.startswith("/omnex/browse?")
    assert _query(link) == {"view": "Images", "format": "csv"}


def test_parse_pretty_path():
    params = parse_pretty_path("Kenney/Car,Kenney/Racing/¬Kenney/Car/Sub¬/+png,jpg+/!1!")
    assert params == {
        "folder": "Kenney/Car,Kenney/Racing",
        "view": "Kenney/Car/Sub",
        "type": "png,jpg",
        "showAll": "1",
    }


def test_parse_pretty_path_partial():
    assert parse_pretty_path("+glb+") == {"type": "glb"}
    assert parse_pretty_path("/Images/") == {"folder": "Images"}
    assert parse_pretty_path("") == {}


def test_pretty_link_round_trip(assets):
    state = decode_query({"folder": "Images,Models", "view": "Models", "type": "glb", "color": "00ff00"}, assets)
    link = build_pretty_link(state, base="/omnex/b")
    path, _, query = link.partition("?")
    assert query == "color=00ff00"
    tail = unquote(path[len("/omnex/b/"):])
    assert parse_pretty_path(tail) == {"folder": "Images,Models", "view": "Models", "type": "glb"}


def test_pretty_link_without_folder_has_single_slash(assets):
    state = decode_query({"type": "png"}, assets)
    assert build_pretty_link(state, base="/omnex/b/") == "/omnex/b/%2Bpng%2B"
