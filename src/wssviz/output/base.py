"""
Abstract receiver of rendered frames.
"""

from abc import ABC, abstractmethod


class FrameSink(ABC):
    """Receives each finished raster together with its labels."""

    @abstractmethod
    def add_frame(
        self,
        index: int,
        pixels: bytes,
        image_size: int,
        caption: str,
        elapsed_label: str,
    ) -> None:
        """
        Accept one frame.

        Args:
            index: Zero-based frame number
            pixels: RGB bytes, row-major, 3 * image_size ** 2 long
            image_size: Side of the square raster in pixels
            caption: Workload description drawn bottom-left
            elapsed_label: Elapsed time drawn bottom-right
        """
        pass

    @abstractmethod
    def finalize(self) -> None:
        """Write whatever needs the complete sequence."""
        pass
