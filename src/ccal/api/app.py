import logging
import os

from fastapi import FastAPI
from ccal.api.public import router as public_router

logging.basicConfig(
    level=os.environ.get("CCAL_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="ccal public api")
app.include_router(public_router)
