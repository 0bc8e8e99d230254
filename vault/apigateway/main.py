from __future__ import annotations
import logging

from .app import create_app

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

# ASGI entrypoint: uvicorn vault.apigateway.main:app
app = create_app()
