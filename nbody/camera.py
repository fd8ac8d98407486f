#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.
"""
from typing import Optional, Tuple
from .constants import (
    DEFAULT_ZOOM,
    MIN_ZOOM,
    MAX_ZOOM,
    PAN_STEP,
    VIEW_WIDTH,
    VIEW_HEIGHT,
)
from .vector_utils import clamp


class Camera2D:
    """
    Simple 2D camera that maps world coordinates to screen pixels.

    center is the world point shown in the middle of the viewport; zoom is pixels per
    world unit, so the central mass sits mid-screen at start-up.
    """

    def __init__(self, center=(0.0, 0.0), zoom=DEFAULT_ZOOM):
        self.center = [center[0], center[1]]
        self.zoom_level = zoom
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def world_to_screen(self, pos: Tuple[float, float]) -> Tuple[int, int]:
        cx, cy = self.center
        z = self.zoom_level
        px = (pos[0] - cx) * z + self.viewport_size[0] / 2
        py = (pos[1] - cy) * z + self.viewport_size[1] / 2
        return (int(px), int(py))

    def screen_to_world(self, screen: Tuple[int, int]) -> Tuple[float, float]:
        cx, cy = self.center
        z = self.zoom_level
        wx = (screen[0] - self.viewport_size[0] / 2) / z + cx
        wy = (screen[1] - self.viewport_size[1] / 2) / z + cy
        return (wx, wy)

    def zoom(self, factor, pivot_screen: Optional[Tuple[int, int]] = None):
        """Zoom so that the world point under pivot_screen (if given) stays put."""
        before = None
        if pivot_screen is not None:
            before = self.screen_to_world(pivot_screen)
        self.zoom_level = clamp(self.zoom_level * factor, MIN_ZOOM, MAX_ZOOM)
        if before is not None:
            after = self.screen_to_world(pivot_screen)
            self.center[0] += (before[0] - after[0])
            self.center[1] += (before[1] - after[1])

    def pan_pixels(self, dx_pixels, dy_pixels):
        """Drag the scene by a screen offset."""
        self.center[0] -= dx_pixels / self.zoom_level
        self.center[1] -= dy_pixels / self.zoom_level

    def pan_step(self, dx_steps, dy_steps):
        """Keyboard panning: move the view by whole PAN_STEPs, scaled for zoom."""
        self.center[0] += dx_steps * PAN_STEP / self.zoom_level
        self.center[1] += dy_steps * PAN_STEP / self.zoom_level

    def world_radius_to_pixels(self, radius: float, minimum: int = 1) -> int:
        return max(minimum, int(radius * self.zoom_level))

    def reset(self):
        self.center = [0.0, 0.0]
        self.zoom_level = DEFAULT_ZOOM
