import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("TODO_API_SETTINGS_PATH", os.path.join(os.getcwd(), "_pytest_settings.toml"))
os.environ.setdefault("TODO_API_BCRYPT_ROUNDS", "4")
