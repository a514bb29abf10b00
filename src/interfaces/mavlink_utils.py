"""
MAVLink flight command sink.

Set C.MAVLINK_URL (or pass --mavlink-url) to something like
'udpout:127.0.0.1:14540'. Without a URL the sink runs dry: every command is
logged and nothing is sent.
"""
import logging
from typing import Optional

import numpy as np
from pymavlink import mavutil

import config as C
from schemas import VelocitySetpoint
from src.interfaces.frame_utils import clamp_setpoint, flu_to_frd

logger = logging.getLogger(__name__)

# ignore position, acceleration and yaw; use velocity + yaw_rate
VELOCITY_YAW_RATE_MASK = 0b0000010111000111
FORCE_DISARM_MAGIC = 21196


def connect(url: Optional[str] = C.MAVLINK_URL, heartbeat_timeout: float = 5.0):
    if url is None:
        return None
    conn = mavutil.mavlink_connection(url)
    msg = conn.wait_heartbeat(timeout=heartbeat_timeout)
    if msg is None:
        logger.warning("No heartbeat from %s after %.1fs", url, heartbeat_timeout)
    else:
        logger.info("Connected to system %d on %s", conn.target_system, url)
    return conn


class MavlinkCommandSink:
    """
    Accepts normalized setpoints and discrete commands, forwards them over
    MAVLink (or just logs them when `conn` is None).
    """

    def __init__(self, conn=None):
        self.conn = conn
        self.airborne = False

    def set_velocity(self, sp: VelocitySetpoint):
        sp = clamp_setpoint(sp)
        v_flu = np.array([sp.forward * C.V_MAX, sp.left * C.V_MAX, sp.up * C.VZ_MAX])
        v_frd = flu_to_frd(v_flu)
        # FLU yaw is counter-clockwise positive, FRD is clockwise positive
        yaw_rate = -sp.yaw_rate * C.YAW_RATE_MAX

        if self.conn is None:
            logger.debug("[dry] velocity frd=(%.2f, %.2f, %.2f) yaw_rate=%.2f",
                         v_frd[0], v_frd[1], v_frd[2], yaw_rate)
            return
        self.conn.mav.set_position_target_local_ned_send(
            0, self.conn.target_system, self.conn.target_component,
            mavutil.mavlink.MAV_FRAME_BODY_NED,
            VELOCITY_YAW_RATE_MASK,
            0, 0, 0,
            float(v_frd[0]), float(v_frd[1]), float(v_frd[2]),
            0, 0, 0,
            0, float(yaw_rate),
        )

    def _command_long(self, name: str, command: int, *params: float):
        p = list(params) + [0.0] * (7 - len(params))
        logger.info("Flight command: %s", name)
        if self.conn is None:
            return
        self.conn.mav.command_long_send(
            self.conn.target_system, self.conn.target_component,
            command, 0, *p,
        )

    def takeoff(self):
        self._command_long("takeoff", mavutil.mavlink.MAV_CMD_NAV_TAKEOFF,
                           0, 0, 0, 0, 0, 0, C.TAKEOFF_ALT_M)
        self.airborne = True

    def land(self):
        self._command_long("land", mavutil.mavlink.MAV_CMD_NAV_LAND)
        self.airborne = False

    def calibrate(self):
        # gyro calibration
        self._command_long("calibrate", mavutil.mavlink.MAV_CMD_PREFLIGHT_CALIBRATION, 1)

    def flat_trim(self):
        # param5=2: board level (accelerometer trim)
        self._command_long("flat trim", mavutil.mavlink.MAV_CMD_PREFLIGHT_CALIBRATION,
                           0, 0, 0, 0, 2)

    def emergency_stop(self):
        self._command_long("emergency stop", mavutil.mavlink.MAV_CMD_COMPONENT_ARM_DISARM,
                           0, FORCE_DISARM_MAGIC)
        self.airborne = False
