import hashlib

from omnex_backend.features.browser.models import AssetNode
from omnex_backend.features.ui import accent_palette, breadcrumbs, folder_hue, paginate, sort_for_display


def _file(name):
    return AssetNode.file(name, relative_path=name, web_url="", mime_type="", size_bytes=1)


def _dir(name):
    return AssetNode.directory(name, relative_path=name, web_url="")


def test_sort_for_display_dirs_first_natural_order():
    nodes = [_file("img10.png"), _dir("b"), _file("IMG2.png"), _dir("A"), _file("img1.png")]
    ordered = sort_for_display(nodes)
    assert [n.filename for n in ordered] == ["A", "b", "img1.png", "IMG2.png", "img10.png"]
    assert nodes[0].filename == "img10.png"


def test_paginate_basic():
    page = paginate(list(range(45)), 2, 20)
    assert page.items == list(range(20, 40))
    assert page.total_items == 45
    assert page.total_pages == 3
    assert page.has_prev and page.has_next


def test_paginate_clamps_page_into_range():
    assert paginate(list(range(5)), 9, 2).page == 3
    assert paginate(list(range(5)), 9, 2).items == [4]
    assert paginate(list(range(5)), 0, 2).page == 1


def test_paginate_empty_has_one_page():
    page = paginate([], 3, 20)
    assert page.total_pages == 1
    assert page.page == 1
    assert page.items == []


def test_accent_palette():
    palette = accent_palette("D946EF")
    assert palette.hex == "d946ef"
    assert palette.glow == "rgba(217, 70, 239, 0.15)"
    assert palette.border == "rgba(217, 70, 239, 0.4)"
    assert palette.selection == "rgba(217, 70, 239, 0.3)"
    assert accent_palette("nope").hex == "d946ef"


def test_folder_hue_is_md5_prefix():
    hue = folder_hue("Images")
    assert hue == hashlib.md5(b"Images").hexdigest()[:6]
    assert folder_hue("Models") != hue


def test_breadcrumbs():
    crumbs = breadcrumbs("a/b/c")
    assert [(c.name, c.path) for c in crumbs] == [("a", "a"), ("b", "a/b"), ("c", "a/b/c")]
    assert breadcrumbs("") == []
    assert breadcrumbs("a/b", virtual_root=True) == []
