# gunicorn.conf.py
import multiprocessing, os

bind = f"0.0.0.0:{os.getenv('PORT','5000')}"
workers = max(2, multiprocessing.cpu_count() // 2)
threads = 2
worker_class = "gthread"
timeout = 30
graceful_timeout = 15
keepalive = 2
accesslog = "-"   # stdout
errorlog = "-"    # stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()

wsgi_app = "caltime.main:app"

access_log_format = (
    '%(h)s - "%(r)s" %(s)s %(b)s "%(a)s" '
    'req_id:%({X-Request-ID}i)s rt:%(L)s'
)
