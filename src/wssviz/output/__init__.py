"""
Image output: labelled still frames and the animated sequence.
"""

from .base import FrameSink
from .frames import AnimationWriter, label_border, render_frame

__all__ = [
    "FrameSink",
    "AnimationWriter",
    "label_border",
    "render_frame",
]
