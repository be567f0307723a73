"""HTTP service mode for proofreader."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
