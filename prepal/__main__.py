import os

import uvicorn


def main() -> None:
    """
    Lance l'API : `python -m prepal` ou `prepal-api`.
    """
    uvicorn.run(
        "prepal.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3001")),
        reload=os.getenv("APP_ENV", "dev") == "dev",
    )


if __name__ == "__main__":
    main()
