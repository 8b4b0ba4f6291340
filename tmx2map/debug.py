"""tmx2map/debug.py -- Debug flag from environment variable."""

import os

DEBUG = os.environ.get("TMX2MAP_DEBUG", "") == "1"
