from .server import create_app
