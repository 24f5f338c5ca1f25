# app.py
import logging

import click
from flask import Flask, redirect, url_for
from flask_login import current_user
from flask_wtf.csrf import CSRFError, generate_csrf

from config import Config
from extensions import csrf, db, login_manager, migrate


def create_app(config_object=None) -> Flask:
    """
    App factory.
    - Carga configuración
    - Inicializa extensiones (db, migraciones, login, CSRF)
    - Registra blueprints
    - Registra comandos de consola
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object or Config)

    _configure_logging(app)

    # Extensiones
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    # User loader para Flask-Login
    from models import User

    @login_manager.user_loader
    def load_user(user_id: str):
        try:
            return db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            return None

    # Blueprints de la capa API / UI
    from api import api_bp
    from api.auth import auth_bp
    from api.admin import admin_bp

    app.register_blueprint(api_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)

    @app.errorhandler(CSRFError)
    def handle_csrf_error(exc):
        app.logger.warning("CSRF rechazado: %s", exc.description)
        return "Token CSRF inválido o ausente.", 403

    # csrf_token() disponible en todos los templates
    @app.context_processor
    def inject_csrf_token():
        return {"csrf_token": generate_csrf}

    @app.get("/")
    def home():
        """
        Entrada principal:
        - Si no está logueado → pantalla de login
        - Si está logueado → panel de administración
        """
        if not current_user.is_authenticated:
            return redirect(url_for("auth.login_form"))
        return redirect(url_for("admin.dashboard"))

    _register_commands(app)
    return app


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    app.logger.setLevel(level)


def _register_commands(app: Flask) -> None:
    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("full_name")
    @click.password_option()
    def create_admin(email, full_name, password):
        """Crea (o reactiva) un usuario administrador."""
        from models import User
        from services.user_records import MIN_PASSWORD_LENGTH

        if len(password) < MIN_PASSWORD_LENGTH:
            raise click.ClickException(
                f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres."
            )

        email = email.strip().lower()
        user = User.query.filter_by(email=email).first()
        created = user is None
        if created:
            user = User(email=email)
            db.session.add(user)

        user.full_name = full_name.strip()
        user.is_active = True
        user.set_password(password)
        user.stamp(None, created=created)
        db.session.commit()

        click.echo(f"Usuario {'creado' if created else 'actualizado'}: {email}")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Carga el set de datos de demo."""
        from seeds.basic_seed import run_basic_seed

        run_basic_seed(echo=click.echo)


app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
