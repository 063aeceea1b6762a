import shutil

from omnex_backend.features.browser import ScanContext, build_export_tree, build_listing
from omnex_backend.query import decode_query
from omnex_shared import ErrorCode


def _run(site, assets, params, builder):
    state = decode_query(params, assets)
    ctx = ScanContext(
        asset_root=assets,
        serve_root=site.resolve(),
        base_url="http://h/omnex/static",
        extensions=state.type_filter,
    )
    return state, builder(state, ctx)


def test_listing_root_with_type_filter(site, assets):
    _, res = _run(site, assets, {"type": "png,jpg"}, build_listing)
    assert res.ok
    assert {n.filename for n in res.data.nodes} == {"Images", "Models"}
    assert res.data.current_path == ""


def test_listing_view_with_type_filter(site, assets):
    _, res = _run(site, assets, {"view": "Images", "type": "png,jpg"}, build_listing)
    assert {n.filename for n in res.data.nodes} == {"cat.png", "dog.jpg"}
    assert res.data.current_path == "Images"


def test_listing_is_not_recursive_without_show_all(site, assets):
    _, res = _run(site, assets, {}, build_listing)
    assert all(n.children is None for n in res.data.nodes)
    _, res = _run(site, assets, {"showAll": "1"}, build_listing)
    models = next(n for n in res.data.nodes if n.filename == "Models")
    assert models.children is not None


def test_virtual_root_listing_is_pseudo_directories(site, assets):
    state, res = _run(site, assets, {"folder": "Images,Models/Cars"}, build_listing)
    assert state.virtual_root
    listing = res.data
    assert listing.virtual_root
    assert [n.filename for n in listing.nodes] == ["Images", "Models/Cars"]
    for node in listing.nodes:
        assert node.is_dir
        assert node.size_bytes == 0
        assert node.mime_type == ""
        assert node.children is None
        assert node.web_url == ""
    assert [n.relative_path for n in listing.nodes] == ["Images", "Models/Cars"]


def test_virtual_root_export_concatenates_root_scans(site, assets):
    _, res = _run(site, assets, {"folder": "Images,Models", "format": "json"}, build_export_tree)
    assert res.ok
    names = [n.filename for n in res.data]
    assert sorted(names[:2]) == ["cat.png", "dog.jpg"]
    assert sorted(names[2:]) == ["Cars", "empty"]
    assert res.meta == {"roots": 2}


def test_export_is_always_recursive(site, assets):
    _, res = _run(site, assets, {"format": "csv", "showAll": "0"}, build_export_tree)
    models = next(n for n in res.data if n.filename == "Models")
    assert models.children is not None


def test_view_exits_virtual_root(site, assets):
    state, res = _run(site, assets, {"folder": "Images,Models", "view": "Models/Cars"}, build_listing)
    assert not state.virtual_root
    assert [n.filename for n in res.data.nodes] == ["car.glb"]


def test_missing_asset_root_is_config_error(site, assets):
    shutil.rmtree(assets)
    _, listing = _run(site, assets, {}, build_listing)
    assert not listing.ok
    assert listing.code == ErrorCode.CONFIG_ERROR.value
    _, tree = _run(site, assets, {"format": "json"}, build_export_tree)
    assert tree.code == ErrorCode.CONFIG_ERROR.value
