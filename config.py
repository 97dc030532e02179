import os
import secrets
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Base configuration class"""
    SECRET_KEY = os.getenv('SECRET_KEY')
    if not SECRET_KEY:
        # Temporary key, changes on restart. Production refuses this in create_app.
        SECRET_KEY = secrets.token_hex(32)

    # Flask settings
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Site configuration (used when no site_config row is available)
    MOBILE_DOMAIN = os.getenv('MOBILE_DOMAIN', '')
    FULL_SITE_DOMAIN = os.getenv('FULL_SITE_DOMAIN', '')
    MOBILE_THEME = os.getenv('MOBILE_THEME', 'mobile')
    THEME = os.getenv('THEME', 'default')
    MOBILE_SITE_TYPE = os.getenv('MOBILE_SITE_TYPE', 'MobileThemeOnly')

    # Theme active when the variant decision does not pick one
    DEFAULT_THEME = os.getenv('DEFAULT_THEME', 'default')

    # fullSite cookie lease in days (~30 minutes)
    FULL_SITE_COOKIE_EXPIRE_DAYS = float(os.getenv('FULL_SITE_COOKIE_EXPIRE_DAYS', '0.02'))
    # 'request' starts from scratch on every request, 'process' shares one
    # last written value between all visitors of the process
    FULL_SITE_COOKIE_MEMO = os.getenv('FULL_SITE_COOKIE_MEMO', 'request')

    # Supabase site_config store (optional)
    SUPABASE_URL = os.getenv('SUPABASE_URL')
    SUPABASE_ANON_KEY = os.getenv('SUPABASE_ANON_KEY')
    SITE_CONFIG_TABLE = os.getenv('SITE_CONFIG_TABLE', 'site_config')
    SITE_CONFIG_CACHE_SECONDS = int(os.getenv('SITE_CONFIG_CACHE_SECONDS', '60'))

    # Session configuration - secure defaults
    SESSION_COOKIE_SECURE = True  # Require HTTPS
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    TESTING = False
    SESSION_COOKIE_SECURE = False  # Allow HTTP in development (use HTTPS in production!)
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    # Production session settings - enforce HTTPS
    SESSION_COOKIE_SECURE = True  # Requires HTTPS
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Strict'

    @staticmethod
    def validate():
        if not os.getenv('SECRET_KEY'):
            raise ValueError("SECRET_KEY environment variable must be set in production!")


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SESSION_COOKIE_SECURE = False

    # Tests never talk to Supabase
    SUPABASE_URL = None
    SUPABASE_ANON_KEY = None

    MOBILE_DOMAIN = 'http://m.example.com'
    FULL_SITE_DOMAIN = 'http://www.example.com'
    MOBILE_THEME = 'mobile'
    THEME = 'default'
    MOBILE_SITE_TYPE = 'RedirectToDomain'
    FULL_SITE_COOKIE_MEMO = 'request'


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
