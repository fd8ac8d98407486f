import pytest

import nbody_sim
from nbody.control import ControlSurface
from nbody.parameters import PARAMETER_RANGES


class FakeDpg:
    """Records set_value calls in place of the Dear PyGui module."""

    def __init__(self):
        self.values = {}

    def set_value(self, item, value):
        self.values[item] = value

    def get_frame_count(self):
        return 0

    def set_frame_callback(self, frame, callback):
        pass


@pytest.fixture
def fake_dpg(monkeypatch):
    fake = FakeDpg()
    monkeypatch.setattr(nbody_sim, "dpg", fake)
    return fake


@pytest.fixture
def panel(control, fake_dpg):
    # Skip _build_ui: the widget ids are plain strings here.
    ui = nbody_sim.UI.__new__(nbody_sim.UI)
    ui.control = control
    ui.renderer = None
    ui.status_msg_id = "status"
    ui.readout_id = "readout"
    ui._slider_ids = {name: f"slider_{name}" for name in PARAMETER_RANGES}
    ui._preset_map = {}
    ui._shown_params = control.get_parameters()
    return ui


def test_sliders_follow_reset_from_viewport(panel, fake_dpg, control):
    panel._on_slider("slider_softening", 7.0, "softening")
    assert control.get_parameters().softening == 7.0

    # R in the viewport resets the engine without touching the panel.
    control.reset()
    panel._sync_ui_with_sim()

    assert fake_dpg.values["slider_softening"] == 1.0
    assert fake_dpg.values["slider_particle_count"] == 10
    assert "steps: 0" in fake_dpg.values["readout"]


def test_sync_leaves_sliders_alone_when_unchanged(panel, fake_dpg):
    panel._sync_ui_with_sim()
    assert set(fake_dpg.values) == {"readout"}


def test_clamped_slider_value_is_written_back(panel, fake_dpg, control):
    panel._on_slider("slider_time_step", 1.0, "time_step")
    assert fake_dpg.values["slider_time_step"] == 0.1
    panel._sync_ui_with_sim()
    assert set(fake_dpg.values) == {"slider_time_step", "readout"}
