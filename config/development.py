import os

from .config import Config

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# Load demo data on startup when set (see seed.example.json)
SEED_PATH = Config.SEED_PATH

DEFAULT_RULE_SET = Config.DEFAULT_RULE_SET
DEFAULT_SHIFT = Config.DEFAULT_SHIFT
