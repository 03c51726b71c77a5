"""
Desktop client: identify a dish from a file or from the webcam.

Usage:
    python -m dishlens.scripts.capture_identify --file pizza.jpg
    python -m dishlens.scripts.capture_identify            # camera window
        space = capture, esc / q = cancel

DISHLENS_URL (default http://127.0.0.1:8000) points at the service.
CAMERA_ADAPTER=mock uses synthetic frames instead of a real webcam.
"""
import argparse
import asyncio
import os
import sys

import cv2
from dotenv import load_dotenv

from dishlens.adapters.transport.http_identify import HttpIdentifyClient
from dishlens.orchestrator.controller import IdentifyController
from dishlens.orchestrator.contracts import CameraState
from dishlens.orchestrator.render import render_text
from dishlens.services.status_store import StatusStore

WINDOW = "dishlens - space: capture, esc: cancel"


def camera_factory(status):
    if os.getenv("CAMERA_ADAPTER", "cv2").lower() == "mock":
        from dishlens.adapters.camera.mock_camera import MockCamera
        return lambda: MockCamera(status)
    from dishlens.adapters.camera.cv2_camera import CV2Camera
    return lambda: CV2Camera(status)


async def run_camera(controller: IdentifyController) -> bool:
    session = await controller.start_camera()
    if session is None or session.state is not CameraState.ACTIVE:
        print(session.error if session else "camera unavailable", file=sys.stderr)
        controller.close_camera()
        return False

    try:
        while True:
            frame = session.preview()
            if frame is not None:
                cv2.imshow(WINDOW, frame)
            key = cv2.waitKey(30) & 0xFF
            if key in (27, ord("q")):
                return False
            if key == ord(" "):
                if await controller.capture_frame():
                    return True
                print(session.error, file=sys.stderr)
            await asyncio.sleep(0)
    finally:
        controller.close_camera()
        cv2.destroyAllWindows()


async def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Identify a dish from a photo.")
    parser.add_argument("--file", help="image file to upload instead of using the camera")
    parser.add_argument("--url", default=None, help="service base URL")
    parser.add_argument("-v", "--verbose", action="store_true", help="print client log lines")
    args = parser.parse_args(argv)

    load_dotenv(dotenv_path="dishlens/.env", override=False)
    status = StatusStore(echo=args.verbose)
    base_url = args.url or os.getenv("DISHLENS_URL", "http://127.0.0.1:8000")
    client = HttpIdentifyClient(base_url=base_url, status_store=status)
    controller = IdentifyController(client, status, camera_factory=camera_factory(status))

    try:
        if args.file:
            print("Analyzing your dish...")
            await controller.select_file(args.file)
        else:
            if not await run_camera(controller):
                return 1

        if controller.error:
            print(controller.error, file=sys.stderr)
            return 1
        if controller.result is not None:
            print(render_text(controller.result))
        return 0
    finally:
        await controller.aclose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
