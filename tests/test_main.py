import json
import PIL.Image
from beamy.main import main


def write_scene(path, **overrides):
    description = {
        "width": 24,
        "height": 16,
        "ambient": [0.2, 0.2, 0.2],
        "tileSize": 8,
        "objects": [
            {"type": "sphere", "position": [0, 0, -3], "radius": 1, "color": [1, 0.5, 0.25]},
            {"type": "light", "position": [0, 3, 0], "intensity": 10},
        ],
    }
    description.update(overrides)
    path.write_text(json.dumps(description))
    return path


def test_cli_renders_png(tmp_path, capsys):
    scene_path = write_scene(tmp_path / "scene.json")
    out_path = tmp_path / "out.png"

    assert main(["--scene", str(scene_path), "--out", str(out_path), "--workers", "2"]) == 0

    with PIL.Image.open(out_path) as img:
        assert img.size == (24, 16)
    assert "Complete in" in capsys.readouterr().out


def test_cli_missing_scene(tmp_path, capsys):
    assert main(["--scene", str(tmp_path / "missing.json"), "--out", str(tmp_path / "out.png")]) == 1
    assert "not found" in capsys.readouterr().err


def test_cli_bad_scene(tmp_path, capsys):
    scene_path = write_scene(tmp_path / "scene.json", ambient=[1, 2])
    assert main(["--scene", str(scene_path), "--out", str(tmp_path / "out.png")]) == 1
    assert "ambient" in capsys.readouterr().err


def test_cli_null_dimension(tmp_path, capsys):
    scene_path = write_scene(tmp_path / "scene.json", width=None)
    assert main(["--scene", str(scene_path), "--out", str(tmp_path / "out.png")]) == 1
    assert "width" in capsys.readouterr().err


def test_cli_null_radius(tmp_path, capsys):
    scene_path = write_scene(tmp_path / "scene.json", objects=[{"type": "sphere", "radius": None}])
    assert main(["--scene", str(scene_path), "--out", str(tmp_path / "out.png")]) == 1
    assert "radius" in capsys.readouterr().err


def test_cli_ui_launches_with_css(monkeypatch):
    import beamy.ui

    launched = {}

    class FakeDemo:
        def launch(self, **kwargs):
            launched.update(kwargs)

    monkeypatch.setattr(beamy.ui, "create_ui", lambda: FakeDemo())

    assert main(["--ui"]) == 0
    assert launched["css"] == beamy.ui.CSS
