# api/auth.py

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required, login_user, logout_user

from extensions import db
from models import User
from services.user_records import MIN_PASSWORD_LENGTH

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


# ----------------------------------------------
# GET: FORMULARIO DE LOGIN
# ----------------------------------------------
@auth_bp.get("/login")
def login_form():
    # Si ya está logueado → lo enviamos al panel para no romper flujo
    if current_user.is_authenticated:
        return redirect(url_for("admin.dashboard"))

    return render_template("login.html")


# ----------------------------------------------
# POST: PROCESAR LOGIN
# ----------------------------------------------
@auth_bp.post("/login")
def login_submit():
    email = request.form.get("email", "").strip().lower()
    password = request.form.get("password", "").strip()

    if not email or not password:
        flash("Email y contraseña son obligatorios.", "error")
        return redirect(url_for("auth.login_form"))

    user = User.query.filter_by(email=email).first()

    if not user or not user.check_password(password):
        current_app.logger.warning("Login fallido para %s", email)
        flash("Credenciales inválidas.", "error")
        return redirect(url_for("auth.login_form"))

    if not user.is_active:
        flash("El usuario está desactivado.", "error")
        return redirect(url_for("auth.login_form"))

    login_user(user)
    current_app.logger.info("Login OK: user=%s", user.id)
    return redirect(url_for("admin.dashboard"))


# ----------------------------------------------
# LOGOUT
# ----------------------------------------------
@auth_bp.get("/logout")
@login_required
def logout():
    logout_user()
    return redirect(url_for("auth.login_form"))


# ----------------------------------------------
# CAMBIO DE CONTRASEÑA PROPIO
# ----------------------------------------------
@auth_bp.post("/change_password")
@login_required
def change_password():
    """
    Permite al usuario cambiar su propia contraseña.

    Espera por POST (form HTML):
      - current_password
      - new_password
      - confirm_password
    """
    current_password = (request.form.get("current_password") or "").strip()
    new_password = (request.form.get("new_password") or "").strip()
    confirm_password = (request.form.get("confirm_password") or "").strip()

    if not current_password or not new_password or not confirm_password:
        flash("Todos los campos de contraseña son obligatorios.", "error")
        return redirect(url_for("admin.dashboard"))

    if not current_user.check_password(current_password):
        flash("La contraseña actual no es correcta.", "error")
        return redirect(url_for("admin.dashboard"))

    if new_password != confirm_password:
        flash("La nueva contraseña y su confirmación no coinciden.", "error")
        return redirect(url_for("admin.dashboard"))

    if len(new_password) < MIN_PASSWORD_LENGTH:
        flash(f"La nueva contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres.", "error")
        return redirect(url_for("admin.dashboard"))

    current_user.set_password(new_password)
    current_user.stamp(current_user.id)
    db.session.commit()

    flash("Contraseña actualizada correctamente.", "success")
    return redirect(url_for("admin.dashboard"))
