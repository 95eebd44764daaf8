from .config import Config

DEBUG = False

LOG_LEVEL = Config.LOG_LEVEL

SEED_PATH = Config.SEED_PATH

DEFAULT_RULE_SET = Config.DEFAULT_RULE_SET
DEFAULT_SHIFT = Config.DEFAULT_SHIFT
