from __future__ import annotations
import os

APP_NAME = os.getenv("APP_NAME", "secrets-vault")
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")
