"""
Flask application factory.
"""
from flask import Flask, render_template
import logging

__version__ = '1.0.0'


def create_app(config_name=None):
    """
    Create and configure Flask application.

    Args:
        config_name: Configuration name ('development', 'production', 'testing')

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    # Load configuration
    from cms.config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Configure logging
    logging.basicConfig(
        level=logging.INFO if not app.config['DEBUG'] else logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Make sure the document directory exists before the first request
    try:
        from cms.services import init_storage
        init_storage(app)
        app.logger.info(f"Document storage ready at {app.config['DATA_DIR']}")
    except OSError as e:
        app.logger.error(f"Storage initialization failed: {e}")
        raise

    # Register blueprints
    from cms.routes import main, users, documents

    app.register_blueprint(main.bp)
    app.register_blueprint(users.bp)
    app.register_blueprint(documents.bp)

    app.logger.info("All blueprints registered")

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return render_template('error.html', message='Not found'), 404

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"Internal error: {error}")
        return render_template('error.html', message='Internal server error'), 500

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return {
            'status': 'healthy',
            'app': 'CMS',
            'version': __version__
        }, 200

    # Template context processors
    @app.context_processor
    def utility_processor():
        """Make session helpers and formatters available in templates."""
        from cms.auth import get_session_context
        from cms.utils.formatters import format_file_size, format_version_label, pluralize
        return {
            'session_context': get_session_context(),
            'format_file_size': format_file_size,
            'format_version_label': format_version_label,
            'pluralize': pluralize
        }

    app.logger.info(f"Flask app created successfully in {app.config.get('FLASK_ENV', 'development')} mode")

    return app
