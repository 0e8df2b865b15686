# roundvote/asgi.py
# Server entry point: uvicorn roundvote.asgi:app
from roundvote.main import build_default_app

app = build_default_app()
