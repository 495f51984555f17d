"""Gunicorn config for container deployment."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async worker. Fetch status and the registrant list live in-process,
# so one worker keeps every request looking at the same refresh controller.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))
wsgi_app = "khitan_board.main:app"

# PDF rendering of a full list is fast; the sheet fetch has its own timeout
timeout = 60

# Graceful timeout for shutdown (lifespan cancels the refresh timer)
graceful_timeout = 30

# Keep-alive: must exceed the proxy keep-alive (default 60s)
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
