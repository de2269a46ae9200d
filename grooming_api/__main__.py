# grooming_api/__main__.py

import uvicorn

from .config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run("grooming_api.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
