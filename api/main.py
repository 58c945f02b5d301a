from __future__ import annotations

import logging

import uvicorn

from api.dependencies import get_config


def main() -> None:
    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run("api.app:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
