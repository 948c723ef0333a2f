"""Entry point — wires Config → Scanner and analyzes one image file."""
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from foodlens.config import Config
from foodlens.constants import (
    MSG_ERR_BAD_CONFIG,
    MSG_ERR_READ_FILE,
    MSG_SCANNER_STARTING,
    MSG_USAGE,
)
from foodlens.errors import FoodLensError
from foodlens.scanner import Scanner, user_message


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    console = Console()
    match args:
        case [path]:
            pass
        case _:
            console.print(MSG_USAGE)
            return 2

    try:
        config = Config.from_env()
    except ValueError as exc:
        console.print(MSG_ERR_BAD_CONFIG % exc, markup=False)
        return 2
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(MSG_SCANNER_STARTING)

    image_path = Path(path)
    try:
        data = image_path.read_bytes()
    except OSError as exc:
        logger.error(MSG_ERR_READ_FILE, image_path, exc.strerror or exc)
        console.print(MSG_ERR_READ_FILE % (image_path, exc.strerror or exc), markup=False)
        return 1

    mime, _ = mimetypes.guess_type(image_path.name)
    try:
        result = asyncio.run(Scanner(config).scan(data, mime))
    except FoodLensError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        console.print(user_message(exc))
        return 1

    console.print_json(data=result.to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
