import os
import logging
import click
from logging.handlers import RotatingFileHandler
from flask import Flask, jsonify
from flask_wtf.csrf import CSRFError
from config import config
from extensions import db, migrate, csrf, limiter


def configure_logging(app):
    """Configure application logging"""
    if not app.debug and not app.testing:
        # Create logs directory if it doesn't exist
        if not os.path.exists('logs'):
            os.mkdir('logs')

        # File handler for errors
        file_handler = RotatingFileHandler(
            'logs/betplan.log',
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s '
            '[in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('BetPlan Tracker startup')
    else:
        # Development logging to console
        app.logger.setLevel(logging.DEBUG)
        app.logger.info('BetPlan Tracker startup (DEBUG mode)')


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # Configure logging
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    limiter.init_app(app)

    # Add security headers
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        headers = app.config.get('SECURITY_HEADERS', {})
        for header, value in headers.items():
            response.headers[header] = value
        return response

    # Import models to ensure they're registered with SQLAlchemy
    with app.app_context():
        import models  # noqa: F401

    # Register blueprints
    from blueprints.dashboard import dashboard_bp
    from blueprints.bets import bets_bp
    from blueprints.capital import capital_bp
    from blueprints.weekly_plan import weekly_plan_bp
    from blueprints.statistics import statistics_bp
    from blueprints.settings import settings_bp

    app.register_blueprint(dashboard_bp)
    app.register_blueprint(bets_bp)
    app.register_blueprint(capital_bp, url_prefix='/capital')
    app.register_blueprint(weekly_plan_bp)
    app.register_blueprint(statistics_bp)
    app.register_blueprint(settings_bp)

    # Create database tables
    with app.app_context():
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and ':memory:' not in app.config['SQLALCHEMY_DATABASE_URI']:
            os.makedirs(app.instance_path, exist_ok=True)
        db.create_all()

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_commands(app)

    return app


def register_error_handlers(app):
    """Register global error handlers"""
    from services.exceptions import ServiceError

    @app.errorhandler(ServiceError)
    def service_error(error):
        db.session.rollback()
        if error.status_code >= 500:
            app.logger.error(f'Service failure: {error.message}')
        return jsonify({'success': False, 'error': error.message}), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'success': False, 'error': 'Not found'}), 404

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({'success': False, 'error': f'Too many requests: {error.description}'}), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f'Internal Server Error: {error}')
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        return jsonify({'success': False, 'error': f'CSRF token validation failed: {error.description}'}), 400


def register_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db():
        """Create tables and the default capital plan."""
        from services.capital_service import CapitalService
        from services.settings_service import SettingsService

        db.create_all()
        SettingsService.get_or_initialize()
        capital = CapitalService.get_or_initialize()
        click.echo(f'Database ready: {app.config["SQLALCHEMY_DATABASE_URI"]}')
        click.echo(f'Capital plan starts {capital.start_period.label} with {capital.initial_capital}')

    @app.cli.group()
    def capital():
        """Inspect and manage the capital plan."""
        pass

    @capital.command('show')
    def show_capital():
        """Print the compound growth schedule."""
        from services.capital_service import CapitalService

        plan = CapitalService.get_or_initialize()
        click.echo(f'Current month: {plan.current_period.label}  capital: {plan.current_capital}')
        for row in CapitalService.projection_table(plan):
            marker = '*' if row['is_current'] else ' '
            click.echo(
                f"{marker} {row['ordinal']:>3}  {row['month_name']:<9} {row['year']}  "
                f"{row['initial_capital']:>12,}  {row['current_capital']:>12,}  {row['target_capital']:>12,}"
            )

    @capital.command('advance')
    def advance_capital():
        """Move the plan to the next month."""
        from services.capital_service import CapitalService
        from services.exceptions import ServiceError

        try:
            plan = CapitalService.advance_month()
        except ServiceError as e:
            click.echo(f'ERROR: {e.message}', err=True)
            return
        click.echo(f'SUCCESS: now in {plan.current_period.label}')

    @capital.command('reset')
    @click.confirmation_option(prompt='This discards all month edits and progress. Continue?')
    def reset_capital():
        """Re-project the plan from its original start."""
        from services.capital_service import CapitalService
        from services.exceptions import ServiceError

        try:
            plan = CapitalService.reset()
        except ServiceError as e:
            click.echo(f'ERROR: {e.message}', err=True)
            return
        click.echo(f'SUCCESS: plan reset to {plan.start_period.label}')


if __name__ == '__main__':
    app = create_app()
    app.run(debug=True)
