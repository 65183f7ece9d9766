import argparse
import sys
import time
from beamy import constants
from beamy.core import Renderer
from beamy.image import save_png
from beamy.loader import load_scene
from beamy.logging_config import setup_logging


def render_file(scene_path, output_path, workers=None, tile_size=None, shadows=None):
    """Load a scene description, render it and write a PNG."""
    scene, settings = load_scene(scene_path)
    renderer = Renderer(
        scene,
        tile_size=tile_size if tile_size is not None else settings.tile_size,
        workers=workers,
        shadows=shadows if shadows is not None else settings.shadows,
    )

    print(f"Rendering {scene_path} ({scene.width}x{scene.height})...")
    t0 = time.time()
    buffer = renderer.render()
    print(f"  Complete in {time.time() - t0:.2f}s")

    save_png(buffer, scene.width, scene.height, output_path)
    print(f"  Saved {output_path}")
    return buffer


def main(argv=None):
    parser = argparse.ArgumentParser(description="beamy ray tracer CLI")
    parser.add_argument("--scene", default=constants.DEFAULT_SCENE_PATH, help="Scene description (JSON)")
    parser.add_argument("--out", default=constants.DEFAULT_OUTPUT_PATH, help="Output PNG path")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads used to render tiles")
    parser.add_argument("--tile", type=int, default=None, help="Tile size in pixels (overrides the scene's tileSize)")
    parser.add_argument("--shadows", action="store_true", default=None, help="Cast shadow rays toward lights")
    parser.add_argument("--ui", action="store_true", help="Launch the interactive Gradio UI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    if args.ui:
        from beamy.ui import CSS, create_ui
        print("Launching UI...")
        demo = create_ui()
        demo.launch(css=CSS)
        return 0

    try:
        render_file(args.scene, args.out, workers=args.workers,
                    tile_size=args.tile, shadows=args.shadows)
    except FileNotFoundError:
        print(f"Error: scene file not found: {args.scene}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def run_ui():
    """Entry point for beamy-ui command."""
    return main(["--ui"])


if __name__ == "__main__":
    sys.exit(main())
