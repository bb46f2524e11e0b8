import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from marker_engine.app.loop import run_game


def main():
    parser = argparse.ArgumentParser(description="Fruit Catcher Launcher")
    parser.add_argument("--game", default="fruit_catcher", help="Game folder name under games/")
    parser.add_argument("--preview", action="store_true", help="Show the per-marker mask windows")
    parser.add_argument("--screen", default="960x540", help="Screen size WxH, e.g. 960x540")
    parser.add_argument("--cam-index", type=int, default=0, help="OpenCV camera index")
    parser.add_argument("--video", default=None, help="Read frames from a video file instead of the camera")
    parser.add_argument("--log-level", default="INFO", help="Logging level, e.g. DEBUG")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    w, h = map(int, args.screen.lower().split("x"))

    sys.exit(run_game(
        game_id=args.game,
        screen_size=(w, h),
        cam_index=args.cam_index,
        show_preview=args.preview,
        video_path=args.video,
    ))


if __name__ == "__main__":
    main()
