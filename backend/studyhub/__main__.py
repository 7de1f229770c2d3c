"""Run the API server: python -m studyhub"""

import uvicorn

from studyhub.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "studyhub.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    main()
