"""Run the API locally: ``python -m llm_router``."""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "llm_router.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_config=None,  # loguru intercepts uvicorn's stdlib loggers
    )


if __name__ == "__main__":
    main()
