
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///local.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = os.getenv("CROSS_ORIGIN_ALLOWED_URL", "*")
    # "any" blocks when either identifier matches; "last-supplied" only
    # consults the phone number when both are given.
    BLACKLIST_MATCH_POLICY = os.getenv("BLACKLIST_MATCH_POLICY", "any")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    BLACKLIST_MATCH_POLICY = "any"
    LOG_LEVEL = "DEBUG"
