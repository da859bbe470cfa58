import os
from datetime import timedelta
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate, upgrade
from dotenv import load_dotenv

# Load environment variables (override=True ensures .env values take precedence)
load_dotenv(override=True)

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()


def create_app(config_name=None):
    """Application factory pattern."""
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret-key-change-me')
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL', 'sqlite:///dev.db')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Session configuration - 30 day persistent sessions
    app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(days=30)
    app.config['SESSION_COOKIE_SECURE'] = os.environ.get('RAILWAY_ENVIRONMENT') is not None  # HTTPS only in production
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

    # Used in welcome emails
    app.config['APP_URL'] = os.environ.get('APP_URL', 'http://localhost:5000')
    app.config['MAIL_SENDER'] = os.environ.get('MAIL_SENDER', 'noreply@kickoff.local')

    # First admin, created by `flask --app kickoff seed-admin`
    app.config['ADMIN_EMAIL'] = os.environ.get('ADMIN_EMAIL')
    app.config['ADMIN_NICKNAME'] = os.environ.get('ADMIN_NICKNAME', 'Admin')

    app.config['LOG_LEVEL'] = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Fix for postgres:// vs postgresql:// (some providers use older postgres:// format)
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('postgres://'):
        app.config['SQLALCHEMY_DATABASE_URI'] = app.config['SQLALCHEMY_DATABASE_URI'].replace(
            'postgres://', 'postgresql://', 1
        )

    if config_name == 'testing':
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite://'
        app.config['SECRET_KEY'] = 'test-secret'
        app.config['SESSION_COOKIE_SECURE'] = False

    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)

    # Register blueprints
    from kickoff.routes.main import main_bp
    from kickoff.routes.auth import auth_bp
    from kickoff.routes.member import member_bp
    from kickoff.routes.admin import admin_bp
    from kickoff.routes.api import api_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(member_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(api_bp)

    # Import models so they're known to Flask-Migrate
    from kickoff import models

    from kickoff.seed import register_commands
    register_commands(app)

    # Auto-run migrations in production (Railway)
    if os.environ.get('RAILWAY_ENVIRONMENT') and config_name != 'testing':
        with app.app_context():
            upgrade()

    return app
