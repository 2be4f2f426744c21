#main.py
import logging
from pathlib import Path

from dotenv import load_dotenv
load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import settings
from api.flow import router as flow_router
from api.generate import router as generate_router
from core.errors import FlowError

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

_STATUS_BY_CODE = {
    "VALIDATION_ERROR": 422,
    "SESSION_NOT_FOUND": 404,
    "GENERATION_FAILED": 502,
}

app = FastAPI(title="Assessment Flow Engine")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(flow_router)
app.include_router(generate_router)


@app.exception_handler(FlowError)
async def flow_error_handler(request: Request, exc: FlowError):
    return JSONResponse(status_code=_STATUS_BY_CODE.get(exc.code, 400), content=exc.to_dict())


@app.get("/")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
