# main_server.py (tuition calculator web app)
import logging
import os
import sys
from dataclasses import dataclass

from flasgger import Swagger
from flask import Flask, current_app, render_template, request, send_from_directory

from config import ConfigError, load_settings
from db import DatabaseError, TuitionDatabase
from forms import ValidationError, parse_lookup_form, parse_tuition_form
from tuition import calculate_tuition

logger = logging.getLogger(__name__)

HTDOC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "htdoc")


@dataclass(frozen=True)
class AppState:
    app_name: str
    db: TuitionDatabase
    error_status: int = 200


def _state() -> AppState:
    return current_app.extensions["tuition"]


# ---------------------------------------------------
# Error page: diagnostic for the operator, generic page for the user
# ---------------------------------------------------
def error_page(console_msg):
    logger.warning(console_msg)
    return render_template("error.html"), _state().error_status


# ---------------------------------------------------
# Flask + Swagger
# ---------------------------------------------------
def create_app(state: AppState) -> Flask:
    app = Flask(__name__)
    app.extensions["tuition"] = state
    Swagger(app, template={
        "swagger": "2.0",
        "info": {"title": state.app_name, "version": "1.0.0"},
        "basePath": "/",
        "schemes": ["http"],
    })

    @app.get("/")
    def index():
        return send_from_directory(HTDOC_DIR, "index.html", mimetype="text/html")

    @app.get("/style.css")
    def style():
        resp = send_from_directory(HTDOC_DIR, "style.css", mimetype="text/css")
        resp.headers["Content-Type"] = "text/css"
        return resp

    @app.post("/lookup")
    def lookup():
        """
        Look up the stored tuition for a student
        ---
        tags: [Tuition]
        consumes:
          - application/x-www-form-urlencoded
        parameters:
          - {in: formData, name: first_name, type: string, required: true}
          - {in: formData, name: last_name, type: string, required: true}
        produces:
          - text/html
        responses:
          200:
            description: Name/tuition table, or the generic error page
        """
        try:
            params = parse_lookup_form(request.form)
        except ValidationError as e:
            return error_page(str(e))

        try:
            record = _state().db.fetch_user_tuition(params.first_name, params.last_name)
        except DatabaseError as e:
            return error_page(f"Error while accessing database: {e}")

        return render_template("lookup.html", record=record)

    @app.post("/calculate")
    def calculate():
        """
        Calculate tuition for a student and store the result
        ---
        tags: [Tuition]
        consumes:
          - application/x-www-form-urlencoded
        parameters:
          - {in: formData, name: first_name, type: string, required: true}
          - {in: formData, name: last_name, type: string, required: true}
          - {in: formData, name: num_credits, type: integer, required: true, minimum: 0, maximum: 255}
          - {in: formData, name: new_student, type: string, enum: ["on"]}
          - {in: formData, name: orientation, type: string, enum: ["on"]}
          - {in: formData, name: student_type, type: string, required: true, enum: [resident, nonresident]}
          - {in: formData, name: student_studies, type: string, required: true, enum: [undergraduate, graduate]}
        produces:
          - text/html
        responses:
          200:
            description: Tuition breakdown, or the generic error page
        """
        try:
            params = parse_tuition_form(request.form)
        except ValidationError as e:
            return error_page(str(e))

        try:
            quote = calculate_tuition(params, _state().db)
        except DatabaseError as e:
            return error_page(str(e))

        return render_template("calculate.html", quote=quote)

    return app


# ---------------------------------------------------
# Run
# ---------------------------------------------------
def main(argv=None):
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    argv = sys.argv[1:] if argv is None else argv
    properties = argv[0] if argv else "db.properties"

    try:
        settings = load_settings(properties)
        db = TuitionDatabase.from_settings(settings)
    except (ConfigError, DatabaseError) as e:
        logger.error("Cannot start server: %s", e)
        return 1

    state = AppState(app_name=settings.app_name, db=db, error_status=settings.error_status)
    app = create_app(state)
    logger.info("Server started at %s:%s. Application name: %r", settings.host, settings.port, state.app_name)
    logger.info("Swagger UI: http://%s:%s/apidocs", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=False, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
