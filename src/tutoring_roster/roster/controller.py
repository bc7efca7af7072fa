from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, abort, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import today_local
from ..container import Container
from ..core.enums import CourseType, ModalState
from ..core.exceptions import ValidationError
from ..ledger.hours import classify, compute_progress
from ..sessions.model import Session
from ..students.model import Student
from ..ui.state import ViewState

logger = logging.getLogger(__name__)


def student_to_dict(student: Student, *, session_count: Optional[int] = None) -> dict:
    out = {
        "id": student.student_id,
        "name": student.name,
        "grade": student.grade,
        "contact": student.contact,
        "course_type": student.course_type.value,
        "total_hours": student.total_hours,
        "used_hours": student.used_hours,
        "remaining_hours": student.remaining_hours,
        "progress": compute_progress(student.used_hours, student.total_hours),
        "balance": classify(student.remaining_hours).value,
    }
    if session_count is not None:
        out["session_count"] = session_count
    return out


def session_to_dict(session: Session) -> dict:
    return {
        "id": session.session_id,
        "student_id": session.student_id,
        "session_date": session.session_date.strftime("%Y-%m-%d"),
        "hours_used": session.hours_used,
        "content": session.content,
        "teacher": session.teacher,
    }


def register(app: Flask, container: Container) -> None:
    service = container.roster_service

    def context_required(view):
        @wraps(view)
        def wrapper(context: str, *args, **kwargs):
            if not service.has_context(context):
                abort(404)
            return view(context, *args, **kwargs)

        return wrapper

    def _render_roster(
        context: str,
        view: ViewState,
        *,
        form: Optional[dict] = None,
        errors: Optional[dict] = None,
        status: int = 200,
    ):
        selected = service.get_student(context, view.student_id) if view.student_id else None
        if view.student_id and not selected:
            view = view.close()

        history = None
        if view.modal is ModalState.VIEW_HISTORY:
            history = service.student_history(context, view.student_id)

        return (
            render_template(
                "roster.html",
                contexts=service.context_overview(),
                active_context=context,
                summary=service.summarize(context),
                rows=service.roster_rows(context),
                view=view,
                modals=ModalState,
                course_types=list(CourseType),
                selected=selected,
                history=history,
                form=form or {},
                errors=errors or {},
                today=today_local(),
            ),
            status,
        )

    # HTML pages

    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("roster", context=service.get_contexts()[0]))

    @app.route("/contexts/<context>", endpoint="roster")
    @context_required
    def roster(context: str):
        view = ViewState.from_query(request.args.get("modal"), request.args.get("student_id"))
        return _render_roster(context, view)

    @app.route("/contexts/<context>/students", methods=["POST"], endpoint="add_student")
    @context_required
    def add_student(context: str):
        try:
            student = service.add_student(
                context,
                name=request.form.get("name", ""),
                grade=request.form.get("grade", ""),
                contact=request.form.get("contact", ""),
                course_type=request.form.get("course_type", ""),
                total_hours=request.form.get("total_hours", ""),
            )
            flash(f"Added {student.name}.", "success")
            return redirect(url_for("roster", context=context))
        except ValidationError as e:
            view = ViewState().open(ModalState.ADD_STUDENT)
            return _render_roster(context, view, form=request.form.to_dict(), errors=e.errors, status=400)
        except Exception:
            logger.exception("add_student failed in %s", context)
            flash("System error while adding the student", "danger")
            return redirect(url_for("roster", context=context))

    @app.route("/contexts/<context>/students/<student_id>/edit", methods=["POST"], endpoint="edit_student")
    @context_required
    def edit_student(context: str, student_id: str):
        try:
            student = service.edit_student(
                context,
                student_id,
                name=request.form.get("name", ""),
                grade=request.form.get("grade", ""),
                contact=request.form.get("contact", ""),
                course_type=request.form.get("course_type", ""),
                total_hours=request.form.get("total_hours", ""),
            )
            if student:
                flash(f"Updated {student.name}.", "success")
            else:
                flash("Student not found", "warning")
            return redirect(url_for("roster", context=context))
        except ValidationError as e:
            view = ViewState().open(ModalState.EDIT_STUDENT, student_id)
            return _render_roster(context, view, form=request.form.to_dict(), errors=e.errors, status=400)
        except Exception:
            logger.exception("edit_student failed in %s", context)
            flash("System error while updating the student", "danger")
            return redirect(url_for("roster", context=context))

    @app.route("/contexts/<context>/students/<student_id>/delete", methods=["POST"], endpoint="delete_student")
    @context_required
    def delete_student(context: str, student_id: str):
        if service.delete_student(context, student_id):
            flash("Student and their session history were deleted.", "success")
        else:
            flash("Student not found", "warning")
        return redirect(url_for("roster", context=context))

    @app.route("/contexts/<context>/students/<student_id>/sessions", methods=["POST"], endpoint="record_session")
    @context_required
    def record_session(context: str, student_id: str):
        try:
            service.record_session(
                context,
                student_id=student_id,
                session_date=request.form.get("session_date", ""),
                hours_used=request.form.get("hours_used", ""),
                content=request.form.get("content", ""),
                teacher=request.form.get("teacher", ""),
            )
            flash("Session recorded.", "success")
            return redirect(url_for("roster", context=context))
        except ValidationError as e:
            view = ViewState().open(ModalState.RECORD_SESSION, student_id)
            return _render_roster(context, view, form=request.form.to_dict(), errors=e.errors, status=400)
        except Exception:
            logger.exception("record_session failed in %s", context)
            flash("System error while recording the session", "danger")
            return redirect(url_for("roster", context=context))

    # JSON API

    def _bad_body():
        return jsonify({"errors": {"body": "Expected a JSON object"}}), 400

    @app.route("/api/contexts", endpoint="api_contexts")
    def api_contexts():
        return jsonify(
            {"contexts": [{"name": c.name, "student_count": c.student_count} for c in service.context_overview()]}
        )

    @app.route("/api/contexts/<context>/students", methods=["GET"], endpoint="api_students")
    @context_required
    def api_students(context: str):
        rows = service.roster_rows(context)
        return jsonify({"students": [student_to_dict(r.student, session_count=r.session_count) for r in rows]})

    @app.route("/api/contexts/<context>/summary", endpoint="api_summary")
    @context_required
    def api_summary(context: str):
        s = service.summarize(context)
        return jsonify(
            {
                "context": s.context,
                "student_count": s.student_count,
                "total_hours": s.total_hours,
                "used_hours": s.used_hours,
                "session_count": s.session_count,
                "normal_count": s.normal_count,
                "low_count": s.low_count,
            }
        )

    @app.route("/api/contexts/<context>/students", methods=["POST"], endpoint="api_add_student")
    @context_required
    def api_add_student(context: str):
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return _bad_body()
        try:
            student = service.add_student(
                context,
                name=data.get("name"),
                grade=data.get("grade"),
                contact=data.get("contact"),
                course_type=data.get("course_type"),
                total_hours=data.get("total_hours"),
            )
        except ValidationError as e:
            return jsonify({"errors": e.errors}), 400
        return jsonify(student_to_dict(student, session_count=0)), 201

    @app.route("/api/contexts/<context>/students/<student_id>", methods=["PUT"], endpoint="api_edit_student")
    @context_required
    def api_edit_student(context: str, student_id: str):
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return _bad_body()
        try:
            student = service.edit_student(
                context,
                student_id,
                name=data.get("name"),
                grade=data.get("grade"),
                contact=data.get("contact"),
                course_type=data.get("course_type"),
                total_hours=data.get("total_hours"),
            )
        except ValidationError as e:
            return jsonify({"errors": e.errors}), 400
        if not student:
            return jsonify({"errors": {"student_id": "Student not found"}}), 404
        return jsonify(student_to_dict(student))

    @app.route("/api/contexts/<context>/students/<student_id>", methods=["DELETE"], endpoint="api_delete_student")
    @context_required
    def api_delete_student(context: str, student_id: str):
        if not service.delete_student(context, student_id):
            return jsonify({"errors": {"student_id": "Student not found"}}), 404
        return "", 204

    @app.route("/api/contexts/<context>/students/<student_id>/sessions", methods=["GET"], endpoint="api_sessions")
    @context_required
    def api_sessions(context: str, student_id: str):
        history = service.student_history(context, student_id)
        if not history:
            return jsonify({"errors": {"student_id": "Student not found"}}), 404
        return jsonify(
            {
                "student": student_to_dict(history.student, session_count=len(history.entries)),
                "sessions": [dict(session_to_dict(e.session), number=e.number) for e in history.entries],
            }
        )

    @app.route("/api/contexts/<context>/students/<student_id>/sessions", methods=["POST"], endpoint="api_record_session")
    @context_required
    def api_record_session(context: str, student_id: str):
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return _bad_body()
        try:
            session = service.record_session(
                context,
                student_id=student_id,
                session_date=data.get("session_date"),
                hours_used=data.get("hours_used"),
                content=data.get("content"),
                teacher=data.get("teacher"),
            )
        except ValidationError as e:
            return jsonify({"errors": e.errors}), 400
        return jsonify(session_to_dict(session)), 201
