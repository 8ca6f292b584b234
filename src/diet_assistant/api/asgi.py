"""ASGI entrypoint for the diet assistant API."""

from diet_assistant.api.app import create_app
from diet_assistant.containers import build_container

app = create_app(build_container())
