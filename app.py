from flask import Flask
from routes.main import main_bp
from routes.api import api_bp
from config import config
from utils.mobile_site import init_mobile_site
import os
import logging


def configure_logging(app):
    """Send application logs to stderr at the configured level"""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    logging.getLogger().setLevel(level)
    app.logger.setLevel(level)


def create_app(config_name=None, site_config_store=None):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    config_name = config_name or os.getenv('FLASK_ENV', 'default')
    config_class = config[config_name]
    if hasattr(config_class, 'validate'):
        config_class.validate()
    app.config.from_object(config_class)

    configure_logging(app)
    if not os.getenv('SECRET_KEY'):
        app.logger.warning("Using temporary SECRET_KEY. Set SECRET_KEY in .env file!")

    app.config['SESSION_COOKIE_NAME'] = 'mobilesite_session'

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)

    # Mobile/full site resolution runs after the blueprints' own request hooks
    init_mobile_site(app, store=site_config_store)

    return app

# Create app instance
app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5001, debug=app.config['DEBUG'])
