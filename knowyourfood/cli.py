# knowyourfood/cli.py
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Callable, List, Optional

from knowyourfood.client.camera import Camera, CameraError
from knowyourfood.client.render import render
from knowyourfood.client.session import CaptureSession
from knowyourfood.config import Settings
from knowyourfood.main import create_app, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="know-your-food",
        description="Upload or capture food to get nutrition insights with AI",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the analysis API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    analyze = sub.add_parser("analyze", help="analyze an image file")
    analyze.add_argument("path")
    analyze.add_argument("--url", help="analysis endpoint (default: ANALYZE_URL)")

    camera = sub.add_parser("camera", help="take a photo with the camera and analyze it")
    camera.add_argument("--device", type=int, help="camera index (default: CAMERA_DEVICE)")
    camera.add_argument("--url", help="analysis endpoint (default: ANALYZE_URL)")
    return parser


async def analyze_file(session: CaptureSession, path: str) -> str:
    if await session.select_file(path):
        await session.analyze()
    return render(session)


def capture_with_camera(session: CaptureSession, camera: Camera, ask: Callable[[str], str] = input) -> bool:
    """Enter takes the shot, q cancels. A cancel leaves the session as it was."""
    with camera:
        answer = ask("Press Enter to capture, q to cancel: ")
        if answer.strip().lower() == "q":
            return False
        session.capture_from_camera(camera)
    return True


def cmd_serve(settings: Settings, args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(create_app(settings), host=args.host, port=args.port)
    return 0


def cmd_analyze(settings: Settings, args: argparse.Namespace) -> int:
    session = CaptureSession(args.url or settings.analyze_url)
    print(asyncio.run(analyze_file(session, args.path)))
    return 1 if session.error else 0


def cmd_camera(settings: Settings, args: argparse.Namespace) -> int:
    session = CaptureSession(args.url or settings.analyze_url)
    device = settings.camera_device if args.device is None else args.device
    try:
        if not capture_with_camera(session, Camera(device)):
            print("Cancelled.")
            return 0
    except CameraError as e:
        logger.error("camera failed: %s", e)
        print(f"Error: {e}")
        return 1
    asyncio.run(session.analyze())
    print(render(session))
    return 1 if session.error else 0


COMMANDS = {
    "serve": cmd_serve,
    "analyze": cmd_analyze,
    "camera": cmd_camera,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    return COMMANDS[args.command](settings, args)


if __name__ == "__main__":
    raise SystemExit(main())
