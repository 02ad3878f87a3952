"""routes 패키지: Blueprint 중앙 등록"""


def register_blueprints(app):
    from routes.auth import auth_bp
    from routes.public import public_bp
    from routes.dashboard import dashboard_bp
    from routes.inquiries import inquiries_bp
    from routes.announcements import announcements_bp
    from routes.business_types import business_types_bp
    from routes.prices import prices_bp
    from routes.users import users_bp
    from routes.settings import settings_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(public_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(inquiries_bp)
    app.register_blueprint(announcements_bp)
    app.register_blueprint(business_types_bp)
    app.register_blueprint(prices_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(settings_bp)
