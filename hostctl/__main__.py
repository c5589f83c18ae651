"""Run the service with ``python -m hostctl``."""

from __future__ import annotations

import uvicorn


def main() -> None:
    uvicorn.run("hostctl.main:app", host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
