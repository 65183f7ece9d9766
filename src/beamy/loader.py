"""
Scene description loading.

A scene description is a JSON object:

    {
        "width": 512, "height": 512, "ambient": [0.1, 0.1, 0.1],
        "tileSize": 32, "shadows": false,
        "camera": {"fov": 60, "position": [0, 0, 0], "rotation": [0, 0, 0]},
        "objects": [
            {"type": "sphere", "position": [0, 0, -5], "radius": 1, "color": [1, 0, 0]},
            {"type": "plane", "position": [0, -1, 0], "normal": [0, -1, 0]},
            {"type": "light", "position": [0, 5, 0], "intensity": 20}
        ]
    }

Missing fields take their defaults. Rotations are Euler angles in degrees
composed as X * Y * Z. Objects with an unknown type are skipped.
"""
from dataclasses import dataclass
import json
import logging
import numpy as np
from beamy import constants
from beamy.primitives import Camera, Light, Plane, Sphere
from beamy.scene import Scene
from beamy.transforms import euler_to_quaternion

logger = logging.getLogger(__name__)


class SceneFormatError(ValueError):
    """Raised when a scene description has the wrong structure."""


@dataclass(frozen=True)
class RenderSettings:
    tile_size: int = constants.DEFAULT_TILE_SIZE
    shadows: bool = False


def _vector(value, key, length=3):
    try:
        v = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as e:
        raise SceneFormatError(f"'{key}' must be a list of {length} numbers, got {value!r}") from e
    if v.shape != (length,):
        raise SceneFormatError(f"'{key}' must be a list of {length} numbers, got {value!r}")
    return v


def _number(value, key, cast=float):
    try:
        return cast(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise SceneFormatError(f"'{key}' must be a number, got {value!r}") from e


def _flag(value, key):
    if not isinstance(value, bool):
        raise SceneFormatError(f"'{key}' must be true or false, got {value!r}")
    return value


def _apply_common(obj, data, index):
    prefix = f"objects[{index}]"
    if isinstance(data.get("position"), list):
        obj.position = _vector(data["position"], f"{prefix}.position")
    if isinstance(data.get("rotation"), list):
        obj.rotation = euler_to_quaternion(_vector(data["rotation"], f"{prefix}.rotation"))
    if isinstance(data.get("scale"), list):
        obj.scale = _vector(data["scale"], f"{prefix}.scale")
    if isinstance(data.get("color"), list):
        obj.color = _vector(data["color"], f"{prefix}.color")
    return obj


def _build_object(data, index):
    if not isinstance(data, dict):
        raise SceneFormatError(f"objects[{index}] must be an object, got {type(data).__name__}")

    kind = data.get("type", "sphere")
    match kind:
        case "sphere":
            obj = Sphere(radius=_number(
                data.get("radius", constants.DEFAULT_RADIUS), f"objects[{index}].radius"))
        case "plane":
            obj = Plane()
            if isinstance(data.get("normal"), list):
                obj.norm = _vector(data["normal"], f"objects[{index}].normal")
        case "light":
            obj = Light(intensity=_number(
                data.get("intensity", constants.DEFAULT_INTENSITY), f"objects[{index}].intensity"))
        case _:
            logger.warning("Skipping objects[%d]: unknown type %r", index, kind)
            return None
    return _apply_common(obj, data, index)


def _build_camera(data):
    camera = Camera()
    if not isinstance(data, dict):
        return camera
    camera.fov = np.deg2rad(_number(data.get("fov", constants.DEFAULT_FOV_DEGREES), "camera.fov"))
    if isinstance(data.get("position"), list):
        camera.position = _vector(data["position"], "camera.position")
    if isinstance(data.get("rotation"), list):
        camera.rotation = euler_to_quaternion(_vector(data["rotation"], "camera.rotation"))
    return camera


def scene_from_dict(data):
    """
    Build a Scene and its render settings from a parsed description.

    Args:
        data: dict parsed from a scene description

    Returns:
        tuple: (Scene, RenderSettings)
    """
    if not isinstance(data, dict):
        raise SceneFormatError(f"Scene description must be an object, got {type(data).__name__}")

    ambient = np.zeros(3)
    if isinstance(data.get("ambient"), list):
        ambient = _vector(data["ambient"], "ambient")

    scene = Scene(
        width=_number(data.get("width", constants.DEFAULT_WIDTH), "width", int),
        height=_number(data.get("height", constants.DEFAULT_HEIGHT), "height", int),
        ambient=ambient,
        camera=_build_camera(data.get("camera")),
    )

    objects = data.get("objects")
    if isinstance(objects, list):
        for i, item in enumerate(objects):
            obj = _build_object(item, i)
            if obj is not None:
                scene.add(obj)

    settings = RenderSettings(
        tile_size=_number(data.get("tileSize", constants.DEFAULT_TILE_SIZE), "tileSize", int),
        shadows=_flag(data.get("shadows", False), "shadows"),
    )

    logger.info("Loaded scene %dx%d with %d occluders and %d lights",
                scene.width, scene.height, len(scene.occluders), len(scene.lights))
    return scene, settings


def loads_scene(text):
    """Parse a JSON scene description string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SceneFormatError(f"Invalid scene JSON: {e}") from e
    return scene_from_dict(data)


def load_scene(path):
    """Load a JSON scene description from `path`."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    logger.debug("Read scene description from %s", path)
    return loads_scene(text)
