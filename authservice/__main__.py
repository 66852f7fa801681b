"""Auth Service entrypoint.

Run with:
  python -m authservice
"""

import uvicorn

from .config import settings


def main() -> None:
    uvicorn.run("authservice.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
