"""ASGI entrypoint for the AAASJ site API."""

from aaasj_site.api.app import create_app
from aaasj_site.containers import build_container

app = create_app(build_container())
