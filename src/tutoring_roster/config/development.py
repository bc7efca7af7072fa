import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# Materialize the demo roster (Login, Meta) on startup
SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "1")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
