import os

# Bind to the port provided via the PORT environment variable, defaulting to
# 5000.
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"

# Requests are short form posts, so plain threaded workers are enough.
worker_class = "gthread"
workers = int(os.getenv("WEB_CONCURRENCY", "2"))
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 30

# Each worker keeps its own page cache; revalidation is shared through the
# page_revisions table.
wsgi_app = "run:app"
