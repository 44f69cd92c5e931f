"""
Still frame and animation output using Pillow.

Every raster is extended by a label strip below it, holding the workload
caption on the left and the elapsed time on the right. Each labelled frame
is written as a numbered PNG immediately; the animated GIF is only written
by finalize(), once the whole sequence is known to be complete.
"""

import logging
import math
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image, ImageDraw, ImageFont

from ..models.config import LabelConfig
from ..models.runtime import RunPaths
from .base import FrameSink

logger = logging.getLogger(__name__)


def label_border(image_size: int, divisor: int = 30) -> int:
    """Height in pixels of the label strip for a raster of side image_size."""
    return max(1, math.ceil(image_size / divisor))


def _load_font(size: int) -> Union[ImageFont.ImageFont, ImageFont.FreeTypeFont]:
    return ImageFont.load_default(size=size)


def render_frame(
    pixels: bytes,
    image_size: int,
    caption: str,
    elapsed_label: str,
    labels: Optional[LabelConfig] = None,
) -> Image.Image:
    """
    Build one labelled RGB frame from a raw raster.

    Args:
        pixels: RGB bytes, row-major, 3 * image_size ** 2 long
        image_size: Side of the raster
        caption: Text drawn bottom-left
        elapsed_label: Text drawn bottom-right
        labels: Label colors and sizing

    Returns:
        Image of image_size x (image_size + label strip) pixels
    """
    labels = labels or LabelConfig()
    expected = 3 * image_size * image_size
    if len(pixels) != expected:
        raise ValueError(f"raster has {len(pixels)} bytes, expected {expected}")

    raster = Image.frombytes("RGB", (image_size, image_size), bytes(pixels))
    border = label_border(image_size, labels.border_divisor)
    frame = Image.new("RGB", (image_size, image_size + border), "black")
    frame.paste(raster, (0, 0))

    font = _load_font(max(1, int(border * labels.font_scale)))
    draw = ImageDraw.Draw(frame)
    bottom = image_size + border

    if caption:
        left, top, right, lower = draw.textbbox((0, 0), caption, font=font)
        draw.text((-left, bottom - lower), caption, fill=labels.caption_color, font=font)
    if elapsed_label:
        left, top, right, lower = draw.textbbox((0, 0), elapsed_label, font=font)
        draw.text(
            (image_size - right, bottom - lower),
            elapsed_label,
            fill=labels.elapsed_color,
            font=font,
        )
    return frame


class AnimationWriter(FrameSink):
    """
    Writes numbered still frames as they arrive and the GIF at the end.
    """

    def __init__(
        self,
        paths: RunPaths,
        frame_delay_ms: int = 1000,
        labels: Optional[LabelConfig] = None,
    ):
        self.paths = paths
        self.frame_delay_ms = frame_delay_ms
        self.labels = labels or LabelConfig()
        self.frames: List[Image.Image] = []
        self.still_files: List[Path] = []
        self.paths.output_dir.mkdir(parents=True, exist_ok=True)

    def add_frame(
        self,
        index: int,
        pixels: bytes,
        image_size: int,
        caption: str,
        elapsed_label: str,
    ) -> None:
        frame = render_frame(pixels, image_size, caption, elapsed_label, self.labels)
        still_path = self.paths.still_frame(index)
        frame.save(still_path)
        self.frames.append(frame)
        self.still_files.append(still_path)
        logger.debug(f"Wrote still frame {still_path}")

    def finalize(self) -> None:
        """
        Write the looping animation.

        Raises:
            ValueError: If no frame was added
        """
        if not self.frames:
            raise ValueError("no frames to animate")
        first, rest = self.frames[0], self.frames[1:]
        first.save(
            self.paths.animation_file,
            save_all=True,
            append_images=rest,
            duration=self.frame_delay_ms,
            loop=0,
        )
        logger.info(
            f"Animation with {len(self.frames)} frames saved to: {self.paths.animation_file}"
        )
