import argparse
import asyncio
import logging
import sys

from gaze_unlock.configs.app import AppSettings
from gaze_unlock.core.manager import UnlockSession
from gaze_unlock.factories import create_controller, create_session_sinks
from gaze_unlock.ui import LoggingUnlockView

EXIT_UNLOCKED = 0
EXIT_FAILED = 1
EXIT_TIMEOUT = 2

logger = logging.getLogger("main")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Gaze corner-sequence unlock")
    backend = parser.add_mutually_exclusive_group()
    backend.add_argument(
        "--dummy",
        action="store_true",
        help="Use a simulated user instead of a real eye tracker."
    )
    backend.add_argument(
        "--tobii",
        action="store_true",
        help="Use the first connected Tobii eye tracker."
    )
    parser.add_argument(
        "--calibrate",
        action="store_true",
        help="Run the quick four-dot calibration before starting."
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="Seconds to wait for the unlock gesture."
    )
    parser.add_argument(
        "--open-browser",
        action="store_true",
        help="Open the redirect URL in a browser after unlocking."
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: AppSettings) -> int:
    controller = create_controller(settings)
    view = LoggingUnlockView(open_browser=args.open_browser)
    session = UnlockSession(controller, settings, view, lambda: create_session_sinks(settings))

    try:
        if not await controller.connect(settings.viewport):
            logger.error("Gaze backend not found.")
            return EXIT_FAILED

        await session.show_ready()
        if args.calibrate:
            await session.calibrate()

        if not await session.start():
            return EXIT_FAILED

        unlocked = await session.wait_unlocked(args.timeout)
        if not unlocked:
            logger.warning("No unlock within %.1f s.", args.timeout)
        return EXIT_UNLOCKED if unlocked else EXIT_TIMEOUT
    finally:
        await session.stop()
        session.shutdown()


def main(argv=None) -> int:
    args = parse_args(argv)

    # 1. Load Configuration
    try:
        settings = AppSettings()
    except Exception as e:
        print(f"Configuration Error: {e}")
        return EXIT_FAILED

    if args.dummy:
        settings.use_dummy_mode = True
    elif args.tobii:
        settings.use_dummy_mode = False

    # 2. Setup Logging
    logging.basicConfig(
        level=settings.logging.level,
        format=settings.logging.format,
        datefmt=settings.logging.datefmt,
        stream=sys.stdout
    )
    logger.info(f"Starting Gaze Unlock v{settings.__version__}")
    if settings.use_dummy_mode:
        logger.warning("RUNNING IN DUMMY MODE.")

    # 3. Run the flow
    try:
        return asyncio.run(run(args, settings))
    except Exception:
        logger.exception("Fatal Application Error")
        return EXIT_FAILED
    finally:
        logger.info("Gaze Unlock has shut down.")


if __name__ == "__main__":
    sys.exit(main())
