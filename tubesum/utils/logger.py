import os
import sys
import logging

LOG_FORMAT = "[%(asctime)s] {%(pathname)s:%(lineno)d} %(levelname)s - %(message)s"

_project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
LOG_DIR = os.getenv("LOG_DIR", os.path.join(_project_root, "logs"))
LOG_FILE = os.path.join(LOG_DIR, "tubesum.log")

os.makedirs(LOG_DIR, exist_ok=True)

_handler_file = logging.FileHandler(LOG_FILE)
_handler_stdout = logging.StreamHandler(sys.stdout)
for _handler in (_handler_file, _handler_stdout):
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))

# third-party HTTP clients log every request at INFO
for _noisy in ("httpx", "httpcore", "hpack"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)

logging = logging.getLogger('tubesum')
logging.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
logging.addHandler(_handler_file)
logging.addHandler(_handler_stdout)
logging.propagate = False
