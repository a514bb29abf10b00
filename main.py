import argparse
import logging

import cv2

import config as C
from src.control.mode_state import ModeState
from src.interfaces import mavlink_utils as M
from src.interfaces.camera import VideoFrameSource
from src.interfaces.config_store import FileStorageConfigStore
from src.interfaces.keyboard import print_key_help
from src.perception.deadzone import deadzone_bounds
from src.pipeline import TrackingPipeline
from src.utils.control_window import ControlWindow
from src.utils.draw import StatsPanel, draw_deadzone, draw_target

logger = logging.getLogger("follower")


def operator_input(pipeline, controls, key) -> bool:
    """Apply slider values, then the key. Returns False when the operator quits."""
    # sliders first, so a toggle or shutdown persists the latest edits
    controls.sync()
    return pipeline.apply_key(key)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--video", default="0", help="Path to an MP4 or video device index (e.g., 0)")
    ap.add_argument("--config-dir", default=C.CONFIG_DIR, help="Folder with per-camera XML configs")
    ap.add_argument("--mavlink-url", default=C.MAVLINK_URL,
                    help="MAVLink endpoint, e.g. udpout:127.0.0.1:14540 (default: dry run)")
    ap.add_argument("--no-show", action="store_true", help="Run without windows (no key input)")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Source (fatal if it cannot be opened)
    source = VideoFrameSource(args.video)

    sink = M.MavlinkCommandSink(M.connect(args.mavlink_url))
    mode_state = ModeState(FileStorageConfigStore(args.config_dir))
    pipeline = TrackingPipeline(mode_state, sink)

    show = not args.no_show
    controls = None
    stats = StatsPanel()
    if show:
        cv2.namedWindow("Input", cv2.WINDOW_NORMAL)
        cv2.resizeWindow("Input", C.FRAME_WIDTH, C.FRAME_HEIGHT)
        cv2.moveWindow("Input", 0, 0)
        cv2.namedWindow("Mask", cv2.WINDOW_NORMAL)
        cv2.resizeWindow("Mask", C.FRAME_WIDTH, C.FRAME_HEIGHT)
        cv2.moveWindow("Mask", C.FRAME_WIDTH, 0)
        controls = ControlWindow(mode_state)
        print_key_help()

    try:
        while True:
            # Operator input and slider values land between cycles
            if show:
                key = cv2.waitKey(C.FRAME_PERIOD_MS)
                if not operator_input(pipeline, controls, key):
                    break

            frame = source.next_frame()
            if frame is None:
                logger.info("End of stream")
                break

            result = pipeline.step(frame)

            if show:
                det = result.detection
                frame = draw_deadzone(frame, deadzone_bounds(pipeline.frame_size,
                                                              mode_state.config.deadzone))
                frame = draw_target(frame, result.contour, det.position if det.found else None)
                stats.update(pipeline.state, mode_state.mode)
                frame = stats.draw(frame)
                cv2.imshow("Input", frame)
                cv2.imshow("Mask", result.mask)
    finally:
        pipeline.shutdown()
        source.release()
        if show:
            cv2.destroyAllWindows()


if __name__ == "__main__":
    main()
