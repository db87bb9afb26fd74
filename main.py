# main.py (raíz)
import logging

import uvicorn

from entropy.api.app import create_app
from entropy.config.settings import settings, setup_logging

setup_logging()

app = create_app()

ROUTES = [
    ("GET ", "/health", "Health check"),
    ("GET ", "/api/entropy", "Get all modules"),
    ("GET ", "/api/entropy/module/:id", "Get specific module"),
    ("POST", "/signup", "User registration"),
    ("POST", "/login", "User login"),
    ("GET ", "/modules", "Get user modules (protected)"),
    ("POST", "/modules/enroll", "Enroll in module (protected)"),
    ("POST", "/modules/complete", "Mark module as completed (protected)"),
]


if __name__ == "__main__":
    logging.info(f"🚀 Entropy Productions API running on port {settings.port}")
    for method, path, desc in ROUTES:
        logging.info(f"   {method} {path} - {desc}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
