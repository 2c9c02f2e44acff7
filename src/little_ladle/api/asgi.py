"""ASGI entrypoint for the Little Ladle API."""

from little_ladle.api.app import create_app
from little_ladle.containers import build_container

app = create_app(build_container())
