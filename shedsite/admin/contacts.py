# shedsite/admin/contacts.py
from flask import Response, abort, redirect, render_template, request

from shedsite.db import SessionLocal
from shedsite.models import CONTACT_STATUSES, ContactSubmission
from shedsite.services.exports import contacts_csv, export_filename

from . import admin_bp, admin_required
from .helpers import back_to, commit_or_flash, get_or_404, newest_first

STATUS_TABS = ("all",) + CONTACT_STATUSES


@admin_bp.get("/contacts")
@admin_required
def contacts_list():
    """Contact messages, newest first, with ?status=all|unread|read tabs."""
    status = request.args.get("status", "all")
    if status not in STATUS_TABS:
        status = "all"

    with SessionLocal() as s:
        contacts = newest_first(s, ContactSubmission)

    counts = {tab: sum(1 for c in contacts if tab == "all" or c.status == tab) for tab in STATUS_TABS}
    visible = [c for c in contacts if status == "all" or c.status == status]

    return render_template(
        "admin/contacts.html",
        contacts=visible,
        status=status,
        counts=counts,
        tabs=STATUS_TABS,
    )


@admin_bp.get("/contacts/<int:contact_id>")
@admin_required
def contact_detail(contact_id: int):
    """Show a message; opening an unread message marks it as read."""
    with SessionLocal() as s:
        contact = get_or_404(s, ContactSubmission, contact_id)
        if contact.status == "unread":
            contact.status = "read"
            commit_or_flash(s, "Error updating message status.")
        return render_template("admin/contact_detail.html", contact=contact)


@admin_bp.post("/contacts/<int:contact_id>/status")
@admin_required
def contact_status(contact_id: int):
    status = request.form.get("status", "")
    if status not in CONTACT_STATUSES:
        abort(400)

    with SessionLocal() as s:
        contact = get_or_404(s, ContactSubmission, contact_id)
        contact.status = status
        commit_or_flash(s, "Error updating message status. Please try again.")

    return redirect(back_to("admin.contacts_list"))


@admin_bp.get("/contacts/export.csv")
@admin_required
def contacts_export():
    with SessionLocal() as s:
        content = contacts_csv(newest_first(s, ContactSubmission))
    return Response(
        content,
        mimetype="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={export_filename('contact-submissions')}"
        },
    )
