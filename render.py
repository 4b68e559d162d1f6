import time
import argparse

# Import necessary components from the sphere_rt package
from sphere_rt.scene import REFERENCE_SPHERES, make_scene
from sphere_rt.camera import Camera
from sphere_rt.types import ShadingConfig
from sphere_rt.integrator import render_image
from sphere_rt.image_io import save_image

def main(argv=None):
    # --- Argument Parsing ---
    parser = argparse.ArgumentParser(description="Sphere ray caster - renders the reference scene to a PPM image")
    parser.add_argument('--width', type=int, default=1280, help='Image width')
    parser.add_argument('--height', type=int, default=720, help='Image height')
    parser.add_argument('--output', type=str, default="output.ppm", help='Output image path (.ppm or .png)')
    args = parser.parse_args(argv)

    width = args.width
    height = args.height

    scene = make_scene(REFERENCE_SPHERES)
    camera = Camera()
    config = ShadingConfig()

    # --- Rendering ---
    print(f"Rendering {width}x{height} image of {scene.num_spheres} spheres...")
    start_time = time.time()
    image = render_image(scene, width, height, camera=camera, config=config)
    image.block_until_ready() # Wait for device completion
    end_time = time.time()
    print(f"Render time: {int((end_time - start_time) * 1000)}ms")

    # --- Save Image ---
    try:
        saved_path = save_image(image, width, height, args.output)
    except OSError as e:
        print(f"Error saving image to {args.output}: {e}")
        return 1
    print(f"Image saved to {saved_path}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
