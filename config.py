"""
config.py
-----------
Centralized configuration/constants for the color-blob follow controller.

These values are imported across perception, control, and interfacing modules.
Per-camera tunables (HSV bounds, area bounds, deadzone) are NOT here: they are
persisted per camera mode by the configuration store and edited live through
the trackbar window. What lives here are the fixed constants of the control law
and the defaults used when nothing has been persisted yet.

Conventions
- Image frame: 640x360 pixels (x right, y down), origin top-left.
- Velocity setpoints are normalized to [-1, 1] in the body FLU frame:
  +forward, +left, +up, +yaw_rate = counter-clockwise (turn left).
  They are scaled and converted to FRD right before MAVLink transmission.

Tuning tips
- If the vehicle overshoots when re-centering, raise the *_GAIN_DIV divisors
  (they divide the pixel error, so bigger = gentler).
- If the follower stops too far / too close, adjust AreaMAX on the trackbar,
  not the constants below.
"""

# -----------------------------
# Frame geometry
# -----------------------------
# Frames are resized to this size by the frame source before processing.
FRAME_WIDTH = 640
FRAME_HEIGHT = 360

# --------------------------------
# Area scaling
# --------------------------------
# Area bounds are stored as small integers (trackbars are integer-bounded,
# 0..AREA_KNOB_MAX). One knob unit corresponds to AREA_KNOB_UNIT units of
# 8-bit mask mass (pixel count * 255), so in raw pixels one knob unit is
# AREA_SCALE pixels. Every comparison against a knob goes through AREA_SCALE.
AREA_KNOB_UNIT = 100000
MASK_VALUE = 255
AREA_SCALE = AREA_KNOB_UNIT / MASK_VALUE  # [px per knob unit] ~392
AREA_KNOB_MAX = 500

# --------------------------------
# Front camera control law
# --------------------------------
# Pixel error is divided by these to get the normalized setpoint.
# Negative sign is applied in the law: target right of center -> turn right.
FRONT_YAW_GAIN_DIV = 200.0   # yaw_rate = (x - W/2) / -200
FRONT_UP_GAIN_DIV = 250.0    # up       = (y - H/2) / -250
APPROACH_SPEED = 0.3         # forward when the target looks small
RETREAT_SPEED = -0.3         # forward when the target looks too big
BACKOFF_MARGIN = 10          # [knob units] band above AreaMAX with no forward change

# --------------------------------
# Bottom camera control law
# --------------------------------
BOTTOM_FORWARD_GAIN_DIV = 400.0  # forward = (y - H/2) / -400
BOTTOM_LEFT_GAIN_DIV = 800.0     # left    = (x - W/2) / -800
DESCENT_RATE = -0.1              # up setpoint while auto-landing

# --------------------------------
# Config store defaults
# --------------------------------
# Used for any key missing from the persisted file (permissive color bounds,
# zero-size deadzone).
HUE_MAX = 179
SAT_MAX = 255
VAL_MAX = 255
DEFAULT_MIN_AREA = 0
DEFAULT_MAX_AREA = 500
DEFAULT_DEADZONE_X = 0
DEFAULT_DEADZONE_Y = 0

CONFIG_DIR = "config"
FRONT_CONFIG_FILE = "front_camera_config.xml"
BOTTOM_CONFIG_FILE = "bottom_camera_config.xml"

# --------------------------------
# Command limits (PX4-friendly)
# --------------------------------
# A normalized setpoint of 1.0 maps to these physical limits.
V_MAX = 1.0        # [m/s] forward / lateral
VZ_MAX = 0.5       # [m/s] vertical
YAW_RATE_MAX = 1.0 # [rad/s] ~57 deg/s

# MAVLink endpoint, e.g. 'udpout:127.0.0.1:14540'. None = dry run (log only).
MAVLINK_URL = None
TAKEOFF_ALT_M = 1.5

# --------------------------------
# Presentation
# --------------------------------
STAT_REFRESH_RATE = 15   # [frames] between stats panel redraws
FRAME_PERIOD_MS = 33     # [ms] waitKey delay, bounds the loop at ~30 FPS
