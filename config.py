# config.py
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./marketplace.db')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Session tokens, one signing key per role
    ADMIN_SECRET_KEY = os.getenv('ADMIN_SECRET_KEY', 'dev-admin-secret-change-in-production')
    USER_SECRET_KEY = os.getenv('USER_SECRET_KEY', 'dev-user-secret-change-in-production')
    TOKEN_EXPIRE_MINUTES = int(os.getenv('TOKEN_EXPIRE_MINUTES', 60))

    # Password hashing and policy
    BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', 12))
    PASSWORD_MIN_LENGTH = int(os.getenv('PASSWORD_MIN_LENGTH', 8))
    PASSWORD_MIN_LOWERCASE = int(os.getenv('PASSWORD_MIN_LOWERCASE', 1))
    PASSWORD_MIN_UPPERCASE = int(os.getenv('PASSWORD_MIN_UPPERCASE', 1))
    PASSWORD_MIN_NUMBERS = int(os.getenv('PASSWORD_MIN_NUMBERS', 1))
    PASSWORD_MIN_SYMBOLS = int(os.getenv('PASSWORD_MIN_SYMBOLS', 1))


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    DATABASE_URL = 'sqlite:///:memory:'
    ADMIN_SECRET_KEY = 'test-admin-secret'
    USER_SECRET_KEY = 'test-user-secret'
    BCRYPT_ROUNDS = 4


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
