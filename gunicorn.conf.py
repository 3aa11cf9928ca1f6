"""Gunicorn config for Render/Railway deployment.

    gunicorn -c gunicorn.conf.py restock.main:app
"""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async workers. Handlers are sync and run in the worker threadpool;
# the SQLAlchemy engine pools connections per worker.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))

# Exports of large ranges can take a while
timeout = 120

# Graceful timeout for shutdown
graceful_timeout = 30

# Keep-alive must exceed the proxy keep-alive (60s)
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("RESTOCK_LOG_LEVEL", "info").lower()
