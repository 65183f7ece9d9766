import json
import gradio as gr
import PIL.Image
from beamy.core import Renderer
from beamy.image import to_image
from beamy.loader import loads_scene

EXAMPLE_SCENE = {
    "width": 320,
    "height": 240,
    "ambient": [0.05, 0.05, 0.08],
    "camera": {"fov": 60, "position": [0, 1, 4], "rotation": [-10, 0, 0]},
    "objects": [
        {"type": "sphere", "position": [0, 0.5, -1], "radius": 1.0, "color": [0.9, 0.3, 0.2]},
        {"type": "sphere", "position": [1.8, 0.2, -2], "radius": 0.7, "color": [0.2, 0.6, 0.9]},
        {"type": "plane", "position": [0, -0.5, 0], "normal": [0, -1, 0], "color": [0.8, 0.8, 0.8]},
        {"type": "light", "position": [2, 4, 2], "intensity": 25, "color": [1, 1, 1]},
    ],
}

CSS = """
.gradio-container { background-color: #0b0f19 !important; color: #e5e7eb !important; }
#output_img { background-color: #0b0f19 !important; border-radius: 8px; overflow: hidden; border: none !important; }
#output_img img { object-fit: contain; image-rendering: pixelated; }
"""


def render_scene_text(text, workers=1, shadows=False) -> PIL.Image.Image:
    """Render a JSON scene description to a Pillow image."""
    scene, settings = loads_scene(text)
    renderer = Renderer(scene, tile_size=settings.tile_size, workers=int(workers),
                        shadows=bool(shadows) or settings.shadows)
    return to_image(renderer.render(), scene.width, scene.height)


def create_ui():

    def render_frame(text, workers, shadows):
        try:
            return render_scene_text(text, workers, shadows)
        except (ValueError, TypeError) as e:
            raise gr.Error(str(e)) from e

    with gr.Blocks(title="beamy") as demo:
        gr.Markdown("# beamy: Scene Preview")
        gr.Markdown("Edit the scene description; the image re-renders on every change.")

        with gr.Row():
            with gr.Column(scale=1):
                scene_text = gr.Code(value=json.dumps(EXAMPLE_SCENE, indent=2), language="json",
                                     label="Scene description")
                workers_slider = gr.Slider(minimum=1, maximum=16, value=4, step=1, label="Worker threads")
                shadows_toggle = gr.Checkbox(value=False, label="Shadow rays", info="Occlusion test toward each light")
                reset_btn = gr.Button("Reset Scene", variant="secondary")

            with gr.Column(scale=2):
                output_img = gr.Image(label="Render", interactive=False, elem_id="output_img")

        inputs = [scene_text, workers_slider, shadows_toggle]

        def reset_view():
            return [json.dumps(EXAMPLE_SCENE, indent=2), 4, False]

        reset_btn.click(fn=reset_view, outputs=inputs)

        for input_comp in inputs:
            input_comp.change(fn=render_frame, inputs=inputs, outputs=output_img,
                              trigger_mode="always_last", show_progress="hidden")

        demo.load(fn=render_frame, inputs=inputs, outputs=output_img, show_progress="hidden")

    return demo


if __name__ == "__main__":
    create_ui().launch(css=CSS)
