import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    SESSION_BACKEND = data.get("SESSION_BACKEND", "redis")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    SESSION_TTL_SECONDS = int(data.get("SESSION_TTL_SECONDS", 7 * 24 * 60 * 60))
    PASSWORD_RESET_TTL_SECONDS = int(data.get("PASSWORD_RESET_TTL_SECONDS", 30 * 60))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    OAUTH_DEFAULT_ROLE = data.get("OAUTH_DEFAULT_ROLE", "student")
