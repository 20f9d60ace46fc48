# legal_search/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware # Import the CORS middleware
from legal_search.api.v1.api import api_router
from legal_search.core.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title="Legal Section Search")
# --- Add CORS Middleware ---
# For development, we allow the web client's default dev server.
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"], # Allow all methods (GET, POST, etc.)
    allow_headers=["*"], # Allow all headers
)
# --- End CORS Middleware ---

app.include_router(api_router, prefix="/api/v1")

@app.get("/")
def read_root():
    return {"message": "Welcome to the Legal Section Search API"}
