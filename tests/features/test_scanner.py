import os

import pytest

from omnex_backend.features.browser.flatten import count_nodes, flatten_tree
from omnex_backend.features.browser.scanner import ScanContext, normalize_extensions, scan_directory

BASE_URL = "http://example.test/omnex/static"


def _ctx(site, assets, extensions=()):
    return ScanContext(
        asset_root=assets,
        serve_root=site.resolve(),
        base_url=BASE_URL,
        extensions=normalize_extensions(extensions),
    )


def _by_name(nodes):
    return {n.filename: n for n in nodes}


def test_non_recursive_scan_has_no_children(site, assets):
    nodes = scan_directory(assets, _ctx(site, assets), recursive=False)
    assert set(_by_name(nodes)) == {"Images", "Models", "readme.md"}
    assert all(n.children is None for n in nodes)
    assert all(not n.expanded for n in nodes)


def test_recursive_scan_expands_every_directory(site, assets):
    nodes = scan_directory(assets, _ctx(site, assets), recursive=True)
    models = _by_name(nodes)["Models"]
    assert models.expanded
    sub = _by_name(models.children)
    assert sub["empty"].children == ()
    assert [c.filename for c in sub["Cars"].children] == ["car.glb"]

    def _check(level):
        for n in level:
            if n.is_dir:
                assert n.children is not None
                _check(n.children)
            else:
                assert n.children is None

    _check(nodes)


def test_file_metadata_and_urls(site, assets):
    nodes = scan_directory(assets / "Images", _ctx(site, assets), recursive=False)
    cat = _by_name(nodes)["cat.png"]
    assert cat.size_bytes == 500
    assert cat.size_formatted == "500 B"
    assert cat.mime_type == "image/png"
    assert cat.extension == "png"
    assert cat.relative_path == "Images/cat.png"
    assert cat.web_url == f"{BASE_URL}/Assets/Images/cat.png"


def test_directory_metadata(site, assets):
    images = _by_name(scan_directory(assets, _ctx(site, assets), recursive=False))["Images"]
    assert images.size_bytes == 0
    assert images.mime_type == ""
    assert images.extension == ""
    assert images.relative_path == "Images"


def test_web_url_is_percent_encoded(site, assets):
    (assets / "My Files").mkdir()
    (assets / "My Files" / "a b#1.png").write_bytes(b"x")
    nodes = scan_directory(assets / "My Files", _ctx(site, assets), recursive=False)
    assert nodes[0].web_url == f"{BASE_URL}/Assets/My%20Files/a%20b%231.png"
    assert nodes[0].relative_path == "My Files/a b#1.png"


def test_filter_keeps_directories_and_matching_files(site, assets):
    ctx = _ctx(site, assets, ["png", "JPG"])
    root = scan_directory(assets, ctx, recursive=False)
    assert set(_by_name(root)) == {"Images", "Models"}

    images = scan_directory(assets / "Images", ctx, recursive=False)
    assert set(_by_name(images)) == {"cat.png", "dog.jpg"}


def test_filter_applies_recursively_without_pruning(site, assets):
    nodes = scan_directory(assets, _ctx(site, assets, ["png"]), recursive=True)
    flat = flatten_tree(nodes)
    files = [n for n in flat if not n.is_dir]
    assert [f.filename for f in files] == ["cat.png"]
    dirs = {n.relative_path for n in flat if n.is_dir}
    assert {"Images", "Models", "Models/Cars", "Models/empty"} <= dirs


def test_missing_directory_yields_empty(site, assets):
    assert scan_directory(assets / "missing", _ctx(site, assets), recursive=True) == []
    assert scan_directory(assets / "readme.md", _ctx(site, assets), recursive=True) == []


def test_normalize_extensions():
    assert normalize_extensions([" PNG", ".jpg", "", "  "]) == frozenset({"png", "jpg"})


def test_flatten_is_preorder_and_complete(site, assets):
    nodes = scan_directory(assets, _ctx(site, assets), recursive=True)
    flat = flatten_tree(nodes)
    assert len(flat) == count_nodes(nodes)
    assert all(n.children is None for n in flat)
    paths = [n.relative_path for n in flat]
    for n in flat:
        parent = n.relative_path.rpartition("/")[0]
        if parent:
            assert paths.index(parent) < paths.index(n.relative_path)


def _make_undecodable_file(directory):
    path = directory / os.fsdecode(b"bad\xffname.png")
    try:
        path.write_bytes(b"x" * 10)
    except (OSError, UnicodeEncodeError):
        pytest.skip("filesystem rejects non-UTF-8 file names")
    return path


def test_undecodable_file_name_is_listed_with_replacement(site, assets):
    _make_undecodable_file(assets / "Images")
    nodes = scan_directory(assets / "Images", _ctx(site, assets), recursive=False)
    bad = next(n for n in nodes if n.filename.startswith("bad"))
    assert bad.filename == "bad\ufffdname.png"
    assert bad.extension == "png"
    assert bad.relative_path == "Images/bad\ufffdname.png"
    assert bad.web_url == f"{BASE_URL}/Assets/Images/bad%FFname.png"
    bad.filename.encode("utf-8")
    assert {"cat.png", "dog.jpg"} <= {n.filename for n in nodes}
