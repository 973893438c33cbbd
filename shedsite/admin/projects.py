# shedsite/admin/projects.py
from flask import flash, redirect, render_template, request, url_for

from shedsite.db import SessionLocal
from shedsite.models import PastProject
from shedsite.validation import validate_project

from . import admin_bp, admin_required
from .helpers import (
    apply, commit_or_flash, form_values, get_or_404, kept_images, newest_first, upload_images,
)

FIELDS = ("title", "description", "project_type", "location", "completion_date", "is_featured")


@admin_bp.get("/projects")
@admin_required
def projects_list():
    with SessionLocal() as s:
        projects = newest_first(s, PastProject)
    return render_template("admin/projects.html", projects=projects)


@admin_bp.route("/projects/new", methods=["GET", "POST"])
@admin_bp.route("/projects/<int:project_id>/edit", methods=["GET", "POST"])
@admin_required
def project_form(project_id: int | None = None):
    with SessionLocal() as s:
        project = get_or_404(s, PastProject, project_id) if project_id else None

        if request.method == "GET":
            return render_template(
                "admin/project_form.html",
                project=project,
                form=form_values(project, FIELDS),
                errors={},
            )

        data, errors = validate_project(request.form)
        if errors:
            return render_template(
                "admin/project_form.html", project=project, form=request.form, errors=errors
            ), 400

        images = kept_images(project.images if project else None)
        data["images"] = images + upload_images("projects")

        if project is None:
            project = PastProject(**data)
            s.add(project)
        else:
            apply(project, data)

        if not commit_or_flash(s, "Error saving project. Please try again."):
            return render_template(
                "admin/project_form.html", project=project, form=request.form, errors={}
            ), 500

    flash("Project saved.", "success")
    return redirect(url_for("admin.projects_list"))


@admin_bp.post("/projects/<int:project_id>/delete")
@admin_required
def project_delete(project_id: int):
    with SessionLocal() as s:
        project = get_or_404(s, PastProject, project_id)
        s.delete(project)
        if commit_or_flash(s, "Error deleting project. Please try again."):
            flash("Project deleted.", "success")
    return redirect(url_for("admin.projects_list"))
