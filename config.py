import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default='false'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')

    # Database Settings
    _database_url = os.environ.get('DATABASE_URL')
    if not _database_url:
        # Fall back to individual PG* variables if DATABASE_URL is missing
        pg_user = os.environ.get('PGUSER')
        pg_pass = os.environ.get('PGPASSWORD')
        pg_host = os.environ.get('PGHOST')
        pg_port = os.environ.get('PGPORT')
        pg_db = os.environ.get('PGDATABASE')
        if all([pg_user, pg_pass, pg_host, pg_port, pg_db]):
            _database_url = f"postgresql://{pg_user}:{pg_pass}@{pg_host}:{pg_port}/{pg_db}"

    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Token Settings
    JWT_SECRET = os.environ.get('JWT_SECRET')
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRATION_HOURS = 24

    # Demo mode skips the database for login. Only enabled explicitly.
    DEMO_MODE = _env_flag('DEMO_MODE') or os.environ.get('DB_HOST') == 'demo'
    DEMO_USERNAME = 'admin'
    DEMO_PASSWORD = 'admin123'
    DEMO_EMAIL = 'demo@example.com'
    DEMO_JWT_SECRET = 'demo-secret'

    # Default admin seeded into an empty database
    ADMIN_DEFAULT_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
    ADMIN_DEFAULT_PASSWORD = os.environ.get('ADMIN_PASSWORD', 'admin123')
    ADMIN_DEFAULT_EMAIL = os.environ.get('ADMIN_EMAIL', 'admin@portfolio.com')

    # Upload Settings
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB
    MAX_IMAGE_SIZE = 5 * 1024 * 1024
    MAX_RESUME_SIZE = 10 * 1024 * 1024
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', 'uploads')

    # Asset host
    CLOUDINARY_CLOUD_NAME = os.environ.get('CLOUDINARY_CLOUD_NAME')
    CLOUDINARY_API_KEY = os.environ.get('CLOUDINARY_API_KEY')
    CLOUDINARY_API_SECRET = os.environ.get('CLOUDINARY_API_SECRET')
    ASSET_STORE = os.environ.get('ASSET_STORE') or ('cloudinary' if CLOUDINARY_CLOUD_NAME else 'local')
    UPLOAD_TIMEOUT = float(os.environ.get('UPLOAD_TIMEOUT', '30'))

    # CORS
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    # JSON Settings
    JSON_AS_ASCII = False


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    JWT_SECRET = Config.JWT_SECRET or 'CHANGE-THIS-JWT-SECRET-IN-DEVELOPMENT'


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # For in-memory SQLite during tests, keep engine options empty to avoid
    # passing invalid pool settings like pool_size to SQLite's StaticPool.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET = 'test-jwt-secret'
    DEMO_MODE = False
    ADMIN_DEFAULT_USERNAME = 'admin'
    ADMIN_DEFAULT_PASSWORD = 'admin123'
    ADMIN_DEFAULT_EMAIL = 'admin@portfolio.com'
    ASSET_STORE = 'local'
    CLOUDINARY_CLOUD_NAME = None
    CLOUDINARY_API_KEY = None
    CLOUDINARY_API_SECRET = None


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
