from .app import create_app, load_settings

__all__ = ["create_app", "load_settings"]
