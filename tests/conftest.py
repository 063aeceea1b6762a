import sys
from pathlib import Path

import pytest

from repo_root import REPO_ROOT

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def site(tmp_path) -> Path:
    """
    Serve root with an `Assets` tree:

        Assets/
          readme.md
          Images/cat.png (500 B), Images/dog.jpg (2048 B)
          Models/Cars/car.glb, Models/empty/
    """
    assets = tmp_path / "Assets"
    (assets / "Images").mkdir(parents=True)
    (assets / "Models" / "Cars").mkdir(parents=True)
    (assets / "Models" / "empty").mkdir()
    (assets / "readme.md").write_text("# hi", encoding="utf-8")
    (assets / "Images" / "cat.png").write_bytes(b"x" * 500)
    (assets / "Images" / "dog.jpg").write_bytes(b"x" * 2048)
    (assets / "Models" / "Cars" / "car.glb").write_bytes(b"glTF")
    return tmp_path


@pytest.fixture
def assets(site) -> Path:
    return (site / "Assets").resolve()
