# stock_tracker/main.py
import logging

import uvicorn

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stock_tracker.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Router imports
from stock_tracker.routes.products import router as products_router
from stock_tracker.routes.stats import router as stats_router
from stock_tracker.routes.reports import router as reports_router

app = FastAPI(title="Stock Tracker API", version="1.0.0")

# The mobile client talks to this service from arbitrary origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Router registration
app.include_router(products_router)
app.include_router(stats_router)
app.include_router(reports_router)

@app.get("/")
def read_root():
    return {"message": "Stock Tracker API is running"}

def run():
    uvicorn.run("stock_tracker.main:app", host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()
