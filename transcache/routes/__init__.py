"""Routes package for the translation cache."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .public import public_bp
    from .cache import cache_bp
    from .translate import translate_bp
    from .admin import admin_bp

    app.register_blueprint(public_bp)
    app.register_blueprint(cache_bp, url_prefix='/cache')
    app.register_blueprint(translate_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')
