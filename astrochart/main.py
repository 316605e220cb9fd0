import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from astrochart.api.v1.router import api_router
from astrochart.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Astrochart", debug=settings.DEBUG)

# Enable CORS to allow requests from browser front-ends on other origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Malformed request bodies and parameters answer 400 in the {code, msg} shape.
    """
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", []) if part != "body")
        msg = error.get("msg", "Invalid value")
        messages.append(f"{field}: {msg}" if field else msg)

    logger.warning(f"Rejected request to {request.url.path}: {messages}")
    return JSONResponse(
        status_code=400,
        content={"code": 400, "msg": "; ".join(messages) or "Invalid request"},
    )


def run():
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    logger.info(f"Server starting on http://{args.host}:{args.port} (ephemeris: {settings.EPHEMERIS_BACKEND})")
    uvicorn.run("astrochart.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    run()
