from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.guard import clear_credential_cookie, set_credential_cookie, teacher_required
from ..common.responses import api_errors, json_error
from ..common.validators import Invalid, parse_body
from ..container import Container
from ..core.constants import MAX_GRADE, MIN_GRADE
from ..core.subjects import subjects_for_grade
from .schemas import LoginRequest, RegisterRequest, teacher_out


def register(app: Flask, container: Container) -> None:
    auth_required = teacher_required(container.credentials)
    secure = container.cookie_secure

    @app.route("/auth/register", methods=["POST"], endpoint="auth_register")
    @api_errors
    def auth_register():
        parsed = parse_body(RegisterRequest, request.get_json(silent=True))
        if isinstance(parsed, Invalid):
            return json_error(parsed.message, 400)

        body = parsed.value
        teacher = container.auth_service.register(
            email=body.email,
            password=body.password,
            name=body.name,
            grade=body.grade,
            subjects=body.subjects,
        )
        return jsonify({"message": "Registration successful", "user": teacher_out(teacher)}), 201

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    @api_errors
    def auth_login():
        parsed = parse_body(LoginRequest, request.get_json(silent=True))
        if isinstance(parsed, Invalid):
            return json_error(parsed.message, 400)

        teacher = container.auth_service.authenticate(parsed.value.email, parsed.value.password)
        token = container.credentials.issue_credential(teacher.teacher_id)

        response = jsonify({"message": "Login successful", "user": teacher_out(teacher)})
        return set_credential_cookie(
            response, token, max_age=container.credentials.max_age_seconds, secure=secure
        )

    @app.route("/auth/logout", methods=["POST"], endpoint="auth_logout")
    @api_errors
    def auth_logout():
        # Stateless credential: clearing the cookie is all there is to do.
        return clear_credential_cookie(jsonify({"message": "Logout successful"}), secure=secure)

    @app.route("/auth/me", methods=["GET"], endpoint="auth_me")
    @api_errors
    @auth_required
    def auth_me():
        teacher = container.auth_service.get_profile(g.teacher_id)
        return jsonify({"user": teacher_out(teacher)})

    @app.route("/auth/delete-account", methods=["DELETE"], endpoint="auth_delete_account")
    @api_errors
    @auth_required
    def auth_delete_account():
        container.auth_service.delete_account(g.teacher_id)
        return clear_credential_cookie(jsonify({"message": "Account deleted"}), secure=secure)

    @app.route("/subjects", methods=["GET"], endpoint="subjects")
    @api_errors
    def subjects():
        grade = request.args.get("grade", type=int)
        if grade is None or grade < MIN_GRADE or grade > MAX_GRADE:
            return json_error(f"Grade must be between {MIN_GRADE} and {MAX_GRADE}", 400)
        return jsonify({"grade": grade, "subjects": subjects_for_grade(grade)})
