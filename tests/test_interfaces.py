from unittest import mock

import numpy as np
import pytest
from pymavlink import mavutil

import config as C
from conftest import MemoryConfigStore, RecordingSink
from schemas import CameraMode, ControllerState, VelocitySetpoint
from src.control.mode_state import ModeState
from src.interfaces.frame_utils import clamp_setpoint, flu_to_frd
from src.interfaces.keyboard import handle_key, is_quit
from src.interfaces.mavlink_utils import (
    FORCE_DISARM_MAGIC,
    VELOCITY_YAW_RATE_MASK,
    MavlinkCommandSink,
)


# ---------------------------------------------------------------------------
# Keyboard
# ---------------------------------------------------------------------------
@pytest.fixture
def ops():
    return ControllerState(), ModeState(MemoryConfigStore()), RecordingSink()


@pytest.mark.parametrize("key,attr,value", [
    ("w", "forward", 1.0), ("s", "forward", -1.0),
    ("a", "yaw_rate", 1.0), ("d", "yaw_rate", -1.0),
    ("q", "left", 1.0), ("e", "left", -1.0),
    ("i", "up", 1.0), ("k", "up", -1.0),
])
def test_manual_keys_set_one_axis(ops, key, attr, value):
    state, modes, sink = ops
    assert handle_key(ord(key), state, modes, sink) is True
    assert getattr(state.setpoint, attr) == value


def test_space_toggles_takeoff_and_land(ops):
    state, modes, sink = ops
    handle_key(ord(" "), state, modes, sink)
    handle_key(ord(" "), state, modes, sink)
    assert sink.commands == ["takeoff", "land"]


def test_discrete_commands(ops):
    state, modes, sink = ops
    for key in "vtp":
        assert handle_key(ord(key), state, modes, sink) is False
    assert sink.commands == ["calibrate", "flat_trim", "emergency_stop"]


def test_flag_toggles_and_camera_switch(ops):
    state, modes, sink = ops
    switched = []

    handle_key(ord("f"), state, modes, sink)
    handle_key(ord("l"), state, modes, sink)
    handle_key(ord("c"), state, modes, sink, on_mode_switch=lambda: switched.append(1))

    assert state.flags.follow and state.flags.auto_land
    assert modes.mode is CameraMode.BOTTOM
    assert switched == [1]


@pytest.mark.parametrize("key", [ord("W"), ord("F"), ord("L"), 0x10000 | ord("q"), 0xFF53])
def test_uppercase_and_extended_codes_are_ignored(ops, key):
    state, modes, sink = ops
    assert handle_key(key, state, modes, sink) is False
    assert state.setpoint == VelocitySetpoint()
    assert not state.flags.follow and not state.flags.auto_land
    assert sink.commands == []
    assert not is_quit(0x10000 | 0x1B)


def test_no_key_and_quit(ops):
    state, modes, sink = ops
    assert handle_key(-1, state, modes, sink) is False
    assert state.setpoint == VelocitySetpoint()
    assert is_quit(0x1B)
    assert not is_quit(-1)
    assert not is_quit(ord("q"))


# ---------------------------------------------------------------------------
# Frame utils
# ---------------------------------------------------------------------------
def test_clamp_setpoint_and_flu_to_frd():
    sp = clamp_setpoint(VelocitySetpoint(forward=1.6, left=-3.0, up=0.2, yaw_rate=-1.2))
    assert sp == VelocitySetpoint(forward=1.0, left=-1.0, up=0.2, yaw_rate=-1.0)
    assert np.allclose(flu_to_frd(np.array([1.0, 2.0, 3.0])), [1.0, -2.0, -3.0])


# ---------------------------------------------------------------------------
# MAVLink sink
# ---------------------------------------------------------------------------
@pytest.fixture
def conn():
    c = mock.MagicMock()
    c.target_system = 1
    c.target_component = 1
    return c


def test_dry_run_sink_tracks_airborne():
    sink = MavlinkCommandSink(None)
    sink.set_velocity(VelocitySetpoint(forward=0.5))
    sink.takeoff()
    assert sink.airborne
    sink.land()
    assert not sink.airborne


def test_set_velocity_scales_clamps_and_converts(conn):
    sink = MavlinkCommandSink(conn)
    sink.set_velocity(VelocitySetpoint(forward=2.0, left=0.5, up=1.0, yaw_rate=0.5))

    args = conn.mav.set_position_target_local_ned_send.call_args[0]
    assert args[3] == mavutil.mavlink.MAV_FRAME_BODY_NED
    assert args[4] == VELOCITY_YAW_RATE_MASK
    assert args[8] == pytest.approx(C.V_MAX)
    assert args[9] == pytest.approx(-0.5 * C.V_MAX)
    assert args[10] == pytest.approx(-C.VZ_MAX)
    assert args[15] == pytest.approx(-0.5 * C.YAW_RATE_MAX)


def test_discrete_commands_map_to_command_long(conn):
    sink = MavlinkCommandSink(conn)
    sink.takeoff()
    sink.land()
    sink.emergency_stop()

    calls = [c[0] for c in conn.mav.command_long_send.call_args_list]
    assert [c[2] for c in calls] == [
        mavutil.mavlink.MAV_CMD_NAV_TAKEOFF,
        mavutil.mavlink.MAV_CMD_NAV_LAND,
        mavutil.mavlink.MAV_CMD_COMPONENT_ARM_DISARM,
    ]
    assert calls[0][10] == C.TAKEOFF_ALT_M
    assert calls[2][4:6] == (0, FORCE_DISARM_MAGIC)
    assert all(len(c) == 11 for c in calls)
