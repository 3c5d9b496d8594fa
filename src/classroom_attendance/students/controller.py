from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.guard import teacher_required
from ..common.responses import api_errors, json_error
from ..common.validators import Invalid, parse_body
from ..container import Container
from .schemas import StudentRequest, student_out


def register(app: Flask, container: Container) -> None:
    auth_required = teacher_required(container.credentials)

    @app.route("/students", methods=["GET"], endpoint="students_list")
    @api_errors
    @auth_required
    def students_list():
        students = container.student_service.list_students(g.teacher_id)
        return jsonify({"students": [student_out(s) for s in students]})

    @app.route("/students", methods=["POST"], endpoint="students_create")
    @api_errors
    @auth_required
    def students_create():
        parsed = parse_body(StudentRequest, request.get_json(silent=True))
        if isinstance(parsed, Invalid):
            return json_error(parsed.message, 400)

        student = container.student_service.add_student(g.teacher_id, name=parsed.value.name, nis=parsed.value.nis)
        return jsonify({"message": "Student added", "student": student_out(student)}), 201

    @app.route("/students/<int:student_id>", methods=["PUT"], endpoint="students_update")
    @api_errors
    @auth_required
    def students_update(student_id: int):
        parsed = parse_body(StudentRequest, request.get_json(silent=True))
        if isinstance(parsed, Invalid):
            return json_error(parsed.message, 400)

        student = container.student_service.update_student(
            g.teacher_id, student_id, name=parsed.value.name, nis=parsed.value.nis
        )
        return jsonify({"message": "Student updated", "student": student_out(student)})

    @app.route("/students/<int:student_id>", methods=["DELETE"], endpoint="students_delete")
    @api_errors
    @auth_required
    def students_delete(student_id: int):
        container.student_service.delete_student(g.teacher_id, student_id)
        return jsonify({"message": "Student deleted"})
