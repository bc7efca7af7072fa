SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

SEED_DEMO_DATA = False

LOG_LEVEL = "WARNING"
