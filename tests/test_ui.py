import json
from beamy.ui import EXAMPLE_SCENE, render_scene_text


def test_example_scene_renders():
    img = render_scene_text(json.dumps(EXAMPLE_SCENE), workers=2, shadows=True)
    assert img.size == (EXAMPLE_SCENE["width"], EXAMPLE_SCENE["height"])
    assert max(img.getextrema()[0]) > 0
