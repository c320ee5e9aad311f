"""
Simple example demonstrating weighted Voronoi stippling
This example stipples a synthetic image in both polarities
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from PIL import Image, ImageDraw
from tqdm import tqdm

from config import StaticConfig
from src.stippling import Polarity, RelaxationDriver, StippleSettings
from src.utils.image_processing import image_to_field
from src.utils.rendering import create_stipple_image, save_svg


def create_sample_image(size=(256, 256), filename='sample_input.png'):
    """Create a sample image with simple shapes for testing"""
    img = Image.new('RGB', size, color='white')
    draw = ImageDraw.Draw(img)

    # Circle
    draw.ellipse([25, 25, 100, 100], fill='black')

    # Rectangle
    draw.rectangle([125, 25, 200, 100], fill='gray')

    # Triangle (polygon)
    draw.polygon([(25, 150), (100, 150), (62, 225)], fill='darkgray')

    # Gradient effect (overlapping circles with increasing brightness)
    for i in range(10):
        gray_value = int(255 * (i / 10))
        draw.ellipse([125 + i*5, 150, 200 + i*5, 225],
                     fill=f'rgb({gray_value}, {gray_value}, {gray_value})')

    img.save(filename)
    return img


class ProgressSink:
    def __init__(self, pbar):
        self.pbar = pbar

    def on_step(self, points, progress):
        self.pbar.n = int(progress * self.pbar.total)
        self.pbar.refresh()

    def on_finish(self, state, points):
        self.pbar.set_postfix({'state': state.value})


def main():
    print("=" * 60)
    print("Weighted Voronoi Stippling - Example Demo")
    print("=" * 60)

    StaticConfig.create_directories(StaticConfig.OUTPUT_DIR, 'data/sample_images')

    print("\n1. Creating sample input image...")
    sample_path = 'data/sample_images/sample_input.png'
    image = create_sample_image(filename=sample_path)
    print(f"   Created: {sample_path}")

    field = image_to_field(image)
    driver = RelaxationDriver()

    print("\n2. Relaxing stipples...")
    for polarity in Polarity:
        settings = StippleSettings(desired_count=1500, iterations=20, sample_count=100,
                                   polarity=polarity, seed=42)
        with tqdm(total=100, desc=polarity.value) as pbar:
            points = driver.run_static(field, settings, sink=ProgressSink(pbar))

        for method in ['solid', 'gaussian']:
            output_path = f'outputs/stippled_{polarity.value}_{method}.png'
            create_stipple_image(points, field, polarity, method=method).save(output_path)
            print(f"   Saved: {output_path}")

        svg_path = f'outputs/stippled_{polarity.value}.svg'
        save_svg(points, field, polarity, svg_path, colorize=True)
        print(f"   Saved: {svg_path}")

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60)


if __name__ == '__main__':
    main()
