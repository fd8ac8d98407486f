#!/usr/bin/env python3
"""
Solar System Formation Simulator: application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui
  control panel (running on the main thread).
- Both talk to one ControlSurface wrapping a Simulation; the simulation's re-entrant
  lock makes every command land between two ticks.
- With --headless, runs a fixed number of ticks without any window and logs the
  energy drift.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the
  viewport), one simulation tick per frame, and drawing from copied body snapshots.
- The UI class runs in the main thread via Dear PyGui. Slider and button callbacks
  call ControlSurface commands; a periodic frame callback refreshes the readouts.

Viewport controls
- Space: run/pause, R: reset to initial conditions, N: new system from current sliders
- M: "Add Mass" mode (next left click drops a heavy body), Esc: cancel
- Right click: add a body on a circular orbit at the cursor
- Left drag: pan, Wheel: zoom, WASD/arrows: pan

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python nbody_sim.py` (see --help)
"""

import logging
import math
import sys
import threading
import time
from typing import Optional

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from nbody.camera import Camera2D
from nbody.constants import (
    BACKGROUND_COLOR,
    HUD_COLOR,
    PREVIEW_COLOR,
    SAFE_COORD_LIMIT,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
    ZOOM_STEP,
    HEAVY_BODY_FACTOR,
)
from nbody.control import ControlSurface
from nbody.data_models import radius_for_mass
from nbody.integrators import INTEGRATORS
from nbody.log import configure_logging
from nbody.parameters import PARAMETER_RANGES
from nbody.presets import list_presets
from nbody.runner import build_simulation, parse_args, run_headless
from nbody.utils import try_int

logger = logging.getLogger("nbody.app")

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: ticks the simulation, draws bodies, the central mass and the HUD.
    Handles panning, zoom and placing new bodies.
    """
    def __init__(self, control: ControlSurface):
        super().__init__(daemon=True)
        self.control = control
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.adding_mass = False
        self.mass_preview: Optional[tuple] = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Solar System Formation Simulator")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()

        last_time = time.perf_counter()
        while self.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events()
            self.control.tick(real_dt)
            self.draw()

            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                try:
                    dpg.stop_dearpygui()
                except Exception:
                    pass

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = ZOOM_STEP if event.y > 0 else 1.0 / ZOOM_STEP
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN:
                mouse = pygame.mouse.get_pos()
                world = self.camera.screen_to_world(mouse)
                if event.button == 1:
                    if self.adding_mass:
                        self.control.add_heavy_body(world)
                        self.adding_mass = False
                        self.mass_preview = None
                    else:
                        self.dragging_background = True
                        self.drag_start_screen = mouse
                elif event.button == 3:
                    self.control.add_body(world)
                elif event.button == 2:
                    self.dragging_background = True
                    self.drag_start_screen = mouse

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button in (1, 2):
                    self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION:
                mouse = pygame.mouse.get_pos()
                if self.dragging_background:
                    dx = mouse[0] - self.drag_start_screen[0]
                    dy = mouse[1] - self.drag_start_screen[1]
                    self.camera.pan_pixels(dx, dy)
                    self.drag_start_screen = mouse
                if self.adding_mass:
                    self.mass_preview = mouse

            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def handle_key(self, key):
        if key == pygame.K_SPACE:
            self.control.toggle_pause()
        elif key == pygame.K_r:
            self.control.reset()
        elif key == pygame.K_n:
            self.control.reinitialize()
        elif key == pygame.K_m:
            self.adding_mass = True
        elif key == pygame.K_ESCAPE:
            self.adding_mass = False
            self.mass_preview = None
        elif key == pygame.K_HOME:
            self.camera.reset()
        elif key in (pygame.K_w, pygame.K_UP):
            self.camera.pan_step(0, -1)
        elif key in (pygame.K_s, pygame.K_DOWN):
            self.camera.pan_step(0, 1)
        elif key in (pygame.K_a, pygame.K_LEFT):
            self.camera.pan_step(-1, 0)
        elif key in (pygame.K_d, pygame.K_RIGHT):
            self.camera.pan_step(1, 0)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        # Copied state; the next tick can run while we draw
        bodies = self.control.get_bodies()
        central = self.control.get_central_mass()
        params = self.control.get_parameters()
        status = self.control.get_status()

        self._draw_disc(surf, central.position, central.radius, central.color)
        for b in bodies:
            self._draw_disc(surf, b.position, b.radius, b.color)

        if self.adding_mass and self.mass_preview is not None:
            preview = _safe_point(self.mass_preview)
            if preview:
                r = self.camera.world_radius_to_pixels(radius_for_mass(params.base_mass * HEAVY_BODY_FACTOR), 2)
                try:
                    gfxdraw.aacircle(surf, preview[0], preview[1], r, PREVIEW_COLOR)
                except Exception:
                    pass

        mode = "Click to place mass" if self.adding_mass else "Drag to pan | Right click: add body | M: add mass"
        draw_text(surf, f"{mode} | Space: Run/Pause | R: Reset | N: New system | Wheel: zoom", 10, 10, HUD_COLOR)
        draw_text(surf,
                  f"[{'Paused' if status['paused'] else 'Running'}]  bodies: {status['bodies']}  "
                  f"t = {status['sim_time']:.2f}  speed: {params.time_speed:.1f}x  dt: {params.time_step:.3f}  "
                  f"fps: {self.clock.get_fps():.0f}",
                  10, 30, HUD_COLOR)

        pygame.display.flip()

    def _draw_disc(self, surf, position, radius, color):
        if not (math.isfinite(position[0]) and math.isfinite(position[1])):
            return  # diverged body
        p = _safe_point(self.camera.world_to_screen(position))
        if p is None:
            return
        r = min(self.camera.world_radius_to_pixels(radius), 50)
        try:
            gfxdraw.filled_circle(surf, p[0], p[1], r, color)
            gfxdraw.aacircle(surf, p[0], p[1], r, color)
        except Exception:
            pass

_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        try:
            pygame.font.init()
        except Exception:
            pass
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 16)
        except Exception:
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))

def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None  # NaN or infinite positions from a blown-up run
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui control panel: one slider per simulation parameter, run/pause,
    reset, new system, add mass, integrator and preset selection.
    """
    def __init__(self, control: ControlSurface, renderer: PygameRenderer):
        self.control = control
        self.renderer = renderer
        self.status_msg_id = None
        self.readout_id = None
        self._slider_ids = {}
        self._preset_map = {}
        self._shown_params = None

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        try:
            current = dpg.get_frame_count()
        except Exception:
            current = 0
        dpg.set_frame_callback(current + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Solar System Formation Simulator - Controls', width=520, height=560)

        with dpg.window(label="Controls", width=500, height=540, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_button(label="Run/Pause", callback=self._toggle_play)
                dpg.add_button(label="Reset", callback=self._reset)
                dpg.add_button(label="New System", callback=self._reinitialize)
                dpg.add_button(label="Add Mass", callback=self._start_add_mass)

            dpg.add_separator()
            dpg.add_text("Parameters")
            params = self.control.get_parameters()
            self._shown_params = params
            for name, bounds in PARAMETER_RANGES.items():
                value = getattr(params, name)
                if bounds.integer:
                    with dpg.group(horizontal=True):
                        self._slider_ids[name] = dpg.add_slider_int(
                            label=bounds.label, min_value=int(bounds.low), max_value=int(bounds.high),
                            default_value=int(value), width=260,
                            callback=self._on_slider, user_data=name)
                        dpg.add_input_text(label="##count", default_value="", width=60, decimal=True,
                                           on_enter=True, callback=self._on_count_text)
                else:
                    self._slider_ids[name] = dpg.add_slider_float(
                        label=bounds.label, min_value=bounds.low, max_value=bounds.high,
                        default_value=float(value), width=260,
                        format="%.3f" if bounds.high <= 1.0 else "%.2f",
                        callback=self._on_slider, user_data=name)

            dpg.add_separator()
            with dpg.group(horizontal=True):
                dpg.add_text("Integrator:")
                dpg.add_combo(list(INTEGRATORS), default_value=self.control.get_status()["integrator"],
                              width=200, callback=lambda s, a, u: self._set_integrator(a))

            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                self._preset_map = {display: fn for fn, display in list_presets()}
                items = list(self._preset_map.keys()) or ["No presets found"]
                dpg.add_combo(items, default_value=items[0], width=220, tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self._load_preset(dpg.get_value("preset_combo")))

            dpg.add_separator()
            self.readout_id = dpg.add_text("")
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # Callbacks
    # -----------------------

    def _set_status(self, msg: str):
        if self.status_msg_id is not None:
            dpg.set_value(self.status_msg_id, msg)

    def _toggle_play(self):
        paused = self.control.toggle_pause()
        self._set_status("Paused." if paused else "Running.")

    def _reset(self):
        self.control.reset()
        self._refresh_sliders()
        self._set_status("Reset to initial conditions.")

    def _reinitialize(self):
        self.control.reinitialize()
        self._set_status("Generated a new system from the current parameters.")

    def _start_add_mass(self):
        self.renderer.adding_mass = True
        self._set_status("Click in the viewport to place a mass.")

    def _on_slider(self, sender, app_data, user_data):
        stored = self.control.set_parameter(user_data, app_data)
        if stored != app_data:
            dpg.set_value(sender, stored)
        self._shown_params = self.control.get_parameters()

    def _on_count_text(self, sender, app_data, user_data=None):
        count = try_int(app_data)
        if count is None:
            self._set_status("Particle count must be a number.")
            return
        stored = self.control.set_parameter("particle_count", count)
        dpg.set_value(self._slider_ids["particle_count"], stored)
        self._shown_params = self.control.get_parameters()
        self._set_status(f"Particle count set to {stored}.")

    def _set_integrator(self, value):
        self.control.set_integrator(value)
        self._set_status(f"Integrator: {value}")

    def _load_preset(self, display: str):
        fn = self._preset_map.get(display)
        if fn is None:
            self._set_status("No preset selected.")
            return
        try:
            name = self.control.apply_preset(fn)
        except (OSError, ValueError) as e:
            logger.warning("Preset %s failed: %s", fn, e)
            self._set_status(f"Could not load preset: {e}")
            return
        self._refresh_sliders()
        self._set_status(f"Loaded preset: {name}")

    def _refresh_sliders(self):
        params = self.control.get_parameters()
        for name, sid in self._slider_ids.items():
            dpg.set_value(sid, getattr(params, name))
        self._shown_params = params

    def _sync_ui_with_sim(self):
        """Periodic refresh of the readout; sliders follow parameter changes made elsewhere (R key)."""
        if self.control.get_parameters() != self._shown_params:
            self._refresh_sliders()
        status = self.control.get_status()
        dpg.set_value(
            self.readout_id,
            f"{'Paused' if status['paused'] else 'Running'} | bodies: {status['bodies']} | "
            f"t = {status['sim_time']:.2f} | steps: {status['steps']}",
        )
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    control = ControlSurface(build_simulation(args))

    if args.headless:
        run_headless(control, args.steps, args.report_every)
        return 0

    renderer = PygameRenderer(control)
    renderer.start()

    ui = UI(control, renderer)

    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    try:
        dpg.start_dearpygui()
    finally:
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()
    return 0

if __name__ == "__main__":
    sys.exit(main())
