import os
import logging
from dotenv import load_dotenv

load_dotenv()

# Logging settings. Key sizes, versions and nonce sizes are fixed by the
# key managers and are not read from the environment.
LOG_LEVEL = logging.getLevelName(os.getenv('KEYCORE_LOG_LEVEL', 'INFO').upper())
if not isinstance(LOG_LEVEL, int):
    LOG_LEVEL = logging.INFO

LOG_JSON = os.getenv('KEYCORE_LOG_JSON', '1').strip().lower() not in ('0', 'false', 'no', 'off')

# Optional host:port for shipping JSON log records over HTTP
SIEM_ENDPOINT = os.getenv('KEYCORE_SIEM_ENDPOINT') or None
