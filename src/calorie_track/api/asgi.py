"""ASGI entrypoint for the calorie tracking API."""

from calorie_track.api.app import create_app
from calorie_track.containers import build_container

app = create_app(build_container())
