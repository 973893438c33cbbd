# shedsite/admin/quotes.py
from flask import Response, abort, flash, redirect, render_template, request, url_for

from shedsite.db import SessionLocal
from shedsite.models import QUOTE_STATUSES, QuoteRequest
from shedsite.services.exports import export_filename, quotes_csv

from . import admin_bp, admin_required
from .helpers import back_to, commit_or_flash, get_or_404, newest_first

STATUS_TABS = ("all",) + QUOTE_STATUSES


@admin_bp.get("/quotes")
@admin_required
def quotes_list():
    """Quote requests, newest first, with ?status=all|pending|responded tabs."""
    status = request.args.get("status", "all")
    if status not in STATUS_TABS:
        status = "all"

    with SessionLocal() as s:
        quotes = newest_first(s, QuoteRequest)

    counts = {tab: sum(1 for q in quotes if tab == "all" or q.status == tab) for tab in STATUS_TABS}
    visible = [q for q in quotes if status == "all" or q.status == status]

    return render_template(
        "admin/quotes.html",
        quotes=visible,
        status=status,
        counts=counts,
        tabs=STATUS_TABS,
    )


@admin_bp.get("/quotes/<int:quote_id>")
@admin_required
def quote_detail(quote_id: int):
    with SessionLocal() as s:
        quote = get_or_404(s, QuoteRequest, quote_id)
        return render_template("admin/quote_detail.html", quote=quote)


@admin_bp.post("/quotes/<int:quote_id>/status")
@admin_required
def quote_status(quote_id: int):
    status = request.form.get("status", "")
    if status not in QUOTE_STATUSES:
        abort(400)

    with SessionLocal() as s:
        quote = get_or_404(s, QuoteRequest, quote_id)
        quote.status = status
        commit_or_flash(s, "Error updating quote status. Please try again.")

    return redirect(back_to("admin.quotes_list"))


@admin_bp.post("/quotes/<int:quote_id>/notes")
@admin_required
def quote_notes(quote_id: int):
    with SessionLocal() as s:
        quote = get_or_404(s, QuoteRequest, quote_id)
        quote.notes = (request.form.get("notes") or "").strip() or None
        if commit_or_flash(s, "Error saving notes. Please try again."):
            flash("Notes saved.", "success")

    return redirect(url_for("admin.quote_detail", quote_id=quote_id))


@admin_bp.get("/quotes/export.csv")
@admin_required
def quotes_export():
    with SessionLocal() as s:
        content = quotes_csv(newest_first(s, QuoteRequest))
    return Response(
        content,
        mimetype="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={export_filename('quote-requests')}"
        },
    )
