# =============================================================================
# File: tests/test_admin.py
# Purpose: Admin back-office: login gate, managers, exports, sitemap tools.
# =============================================================================
import datetime as dt
import io

from shedsite.models import (
    BlogPost,
    BusinessSettings,
    ContactSubmission,
    HomeContent,
    PastProject,
    QuoteRequest,
    Review,
    ShedListing,
    VideoCarousel,
)

ADMIN_EMAIL = "admin@example.com"


def add_quote(db, name="Jane Doe", status="pending", **extra):
    quote = QuoteRequest(customer_name=name, email="jane@example.com", project_type="Custom Shed",
                         description="Barn shed with loft", status=status, **extra)
    db.add(quote)
    db.commit()
    return quote


# ---------------------------------------------------------------------------
# Login gate
# ---------------------------------------------------------------------------


def test_requires_login(client):
    rv = client.get("/admin/quotes")
    assert rv.status_code == 302
    assert "/admin/login?next=/admin/quotes" in rv.headers["Location"].replace("%2F", "/")


def test_admin_disabled(app, client):
    app.config["ADMIN_ENABLED"] = False
    assert client.get("/admin/login").status_code == 404
    assert client.get("/admin/").status_code == 404


def test_login_rejects_bad_password(client):
    rv = client.post("/admin/login", data={"email": ADMIN_EMAIL, "password": "wrong"})
    assert rv.status_code == 401
    assert "Invalid email or password." in rv.get_data(as_text=True)


def test_login_redirects_to_next(client):
    rv = client.post(
        "/admin/login?next=/admin/reviews",
        data={"email": ADMIN_EMAIL.upper(), "password": "correct-horse"},
    )
    assert rv.status_code == 302
    assert rv.headers["Location"].endswith("/admin/reviews")


def test_login_ignores_external_next(client):
    rv = client.post(
        "/admin/login?next=https://evil.example/",
        data={"email": ADMIN_EMAIL, "password": "correct-horse"},
    )
    assert rv.headers["Location"].endswith("/admin/")


def test_session_cookie_is_same_site(client):
    rv = client.post("/admin/login", data={"email": ADMIN_EMAIL, "password": "correct-horse"})
    cookie = rv.headers["Set-Cookie"]
    assert "SameSite=Lax" in cookie
    assert "HttpOnly" in cookie


def test_logout(admin_client):
    admin_client.post("/admin/logout")
    assert admin_client.get("/admin/").status_code == 302


# ---------------------------------------------------------------------------
# Dashboard + sitemap
# ---------------------------------------------------------------------------


def test_dashboard(admin_client, db):
    add_quote(db)
    rv = admin_client.get("/admin/")
    assert rv.status_code == 200
    html = rv.get_data(as_text=True)
    assert "Quote Requests" in html
    assert "Total URLs: 3" in html


def test_download_sitemap(admin_client):
    rv = admin_client.get("/admin/sitemap.xml")
    assert rv.status_code == 200
    assert rv.headers["Content-Disposition"] == "attachment; filename=sitemap.xml"
    assert "<loc>https://example.com/</loc>" in rv.get_data(as_text=True)


def test_ping_sitemap(admin_client, monkeypatch):
    calls = []

    def fake_submit(url, timeout):
        calls.append(url)
        return [
            {"engine": "Google", "success": True, "status": "Submitted"},
            {"engine": "Bing", "success": False, "status": "Failed"},
        ]

    monkeypatch.setattr("shedsite.admin.submit_sitemap", fake_submit)
    rv = admin_client.post("/admin/sitemap/ping", follow_redirects=True)
    assert calls == ["https://example.com/sitemap.xml"]
    html = rv.get_data(as_text=True)
    assert "Google: Submitted" in html
    assert "Bing: Failed" in html


# ---------------------------------------------------------------------------
# Leads
# ---------------------------------------------------------------------------


def test_quotes_status_tabs(admin_client, db):
    add_quote(db, name="Pending Person")
    add_quote(db, name="Answered Person", status="responded")

    html = admin_client.get("/admin/quotes").get_data(as_text=True)
    assert "Pending Person" in html and "Answered Person" in html
    assert "All (2)" in html

    html = admin_client.get("/admin/quotes?status=responded").get_data(as_text=True)
    assert "Answered Person" in html
    assert "Pending Person" not in html


def test_quote_status_and_notes(admin_client, db):
    quote = add_quote(db)

    rv = admin_client.post(f"/admin/quotes/{quote.id}/status", data={"status": "responded"})
    assert rv.status_code == 302
    assert admin_client.post(f"/admin/quotes/{quote.id}/status", data={"status": "lost"}).status_code == 400

    admin_client.post(f"/admin/quotes/{quote.id}/notes", data={"notes": "Called back on Monday"})

    db.expire_all()
    quote = db.get(QuoteRequest, quote.id)
    assert quote.status == "responded"
    assert quote.notes == "Called back on Monday"

    html = admin_client.get(f"/admin/quotes/{quote.id}").get_data(as_text=True)
    assert "Called back on Monday" in html


def test_quotes_export(admin_client, db):
    add_quote(db, created_at=dt.datetime(2025, 1, 31, 9, 0), inspiration_images=["inspiration/a.png"])

    rv = admin_client.get("/admin/quotes/export.csv")
    assert rv.status_code == 200
    assert rv.mimetype == "text/csv"
    assert "attachment; filename=quote-requests-" in rv.headers["Content-Disposition"]
    lines = rv.get_data(as_text=True).split("\n")
    assert lines[0].startswith('"Date","Name","Email"')
    assert lines[1].startswith('"2025-01-31","Jane Doe"')
    assert lines[1].endswith('"Yes"')


def test_contact_opened_is_marked_read(admin_client, db):
    contact = ContactSubmission(name="Bob", email="bob@example.com", message="Do you build garages?",
                                status="unread")
    db.add(contact)
    db.commit()

    rv = admin_client.get(f"/admin/contacts/{contact.id}")
    assert rv.status_code == 200
    db.expire_all()
    assert db.get(ContactSubmission, contact.id).status == "read"

    admin_client.post(f"/admin/contacts/{contact.id}/status", data={"status": "unread"})
    db.expire_all()
    assert db.get(ContactSubmission, contact.id).status == "unread"

    rv = admin_client.get("/admin/contacts/export.csv")
    assert "contact-submissions-" in rv.headers["Content-Disposition"]
    assert '"Bob","bob@example.com"' in rv.get_data(as_text=True)


# ---------------------------------------------------------------------------
# Content managers
# ---------------------------------------------------------------------------


def test_shed_crud(admin_client, db):
    rv = admin_client.post("/admin/sheds/new", data={
        "title": "Classic Barn", "material_type": "Wood", "color": "Red", "size": "10x12",
        "shed_style": "Barn", "price": "4500", "is_active": "1",
        "standard_features": "Double doors\nLoft",
        "images": [(io.BytesIO(b"img"), "barn.png")],
    }, content_type="multipart/form-data")
    assert rv.status_code == 302

    shed = db.query(ShedListing).one()
    assert shed.price == 4500.0
    assert shed.is_active is True
    assert shed.specifications["standard_features"] == ["Double doors", "Loft"]
    assert len(shed.images) == 1 and shed.images[0].startswith("sheds/")

    html = admin_client.get(f"/admin/sheds/{shed.id}/edit").get_data(as_text=True)
    assert "Double doors\nLoft" in html

    admin_client.post(f"/admin/sheds/{shed.id}/toggle")
    db.expire_all()
    assert db.get(ShedListing, shed.id).is_active is False

    admin_client.post(f"/admin/sheds/{shed.id}/delete")
    db.expire_all()
    assert db.query(ShedListing).count() == 0


def test_shed_form_errors(admin_client, db):
    rv = admin_client.post("/admin/sheds/new", data={"title": "", "price": "-5"})
    assert rv.status_code == 400
    html = rv.get_data(as_text=True)
    assert "Title is required" in html
    assert "Price must be positive" in html
    assert db.query(ShedListing).count() == 0


def test_shed_rejects_non_finite_price(admin_client, db):
    rv = admin_client.post("/admin/sheds/new", data={
        "title": "T", "material_type": "Wood", "color": "Red", "size": "8x8",
        "shed_style": "Barn", "price": "nan",
    })
    assert rv.status_code == 400
    assert "Price must be a number" in rv.get_data(as_text=True)
    assert db.query(ShedListing).count() == 0


def test_project_images_removed(admin_client, db):
    project = PastProject(title="Garage", project_type="Garage Addition",
                          images=["projects/a.png", "projects/b.png"])
    db.add(project)
    db.commit()

    rv = admin_client.post(f"/admin/projects/{project.id}/edit", data={
        "title": "Garage", "project_type": "Garage Addition", "completion_date": "2024-09-01",
        "remove_images": ["projects/a.png"],
    })
    assert rv.status_code == 302

    db.expire_all()
    project = db.get(PastProject, project.id)
    assert project.images == ["projects/b.png"]
    assert project.completion_date == dt.date(2024, 9, 1)


def test_review_manager(admin_client, db):
    rv = admin_client.post("/admin/reviews/new", data={
        "customer_name": "Ann", "rating": "6", "review_text": "Great work on our shed!",
    })
    assert rv.status_code == 400
    assert "Rating cannot exceed 5" in rv.get_data(as_text=True)

    admin_client.post("/admin/reviews/new", data={
        "customer_name": "Ann", "rating": "5", "review_text": "Great work on our shed!",
    })
    review = db.query(Review).one()
    assert review.is_approved is False

    admin_client.post(f"/admin/reviews/{review.id}/toggle/is_approved")
    admin_client.post(f"/admin/reviews/{review.id}/toggle/is_featured")
    assert admin_client.post(f"/admin/reviews/{review.id}/toggle/rating").status_code == 404

    db.expire_all()
    review = db.get(Review, review.id)
    assert review.is_approved is True
    assert review.is_featured is True


def test_blog_manager(admin_client, client, db):
    rv = admin_client.post("/admin/blog/new", data={
        "title": "Choosing a Shed Foundation", "content": "Gravel, concrete or skids.", "author": "Sam",
    })
    assert rv.status_code == 302
    post = db.query(BlogPost).one()
    assert post.slug == "choosing-a-shed-foundation"
    assert post.is_published is False
    assert post.published_at is None

    # same title -> same slug -> rejected
    rv = admin_client.post("/admin/blog/new", data={
        "title": "Choosing a Shed Foundation", "content": "Another post body.", "author": "Sam",
    })
    assert rv.status_code == 400
    assert "This slug is already used by another post" in rv.get_data(as_text=True)

    admin_client.post(f"/admin/blog/{post.id}/publish")
    db.expire_all()
    post = db.get(BlogPost, post.id)
    assert post.is_published is True
    assert post.published_at is not None

    assert client.get("/blog/choosing-a-shed-foundation").status_code == 200


def test_business_settings(admin_client, client, db):
    data = {
        "business_name": "Acme Sheds",
        "phone": "555-0199",
        "email": "hello@acme.example",
        "facebook_url": "https://facebook.com/acme",
    }
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday"):
        data[f"hours_{day}"] = "8AM-5PM"
    data["hours_saturday"] = "Closed"

    rv = admin_client.post("/admin/settings", data=data, follow_redirects=True)
    assert "Business settings updated successfully!" in rv.get_data(as_text=True)

    assert db.query(BusinessSettings).count() == 1
    payload = client.get("/api/settings").get_json()
    assert payload["business_name"] == "Acme Sheds"
    assert payload["hours_summary"] == "Mon-Fri: 8AM-5PM"


def test_business_settings_invalid_email(admin_client):
    rv = admin_client.post("/admin/settings", data={"business_name": "Acme", "email": "nope"})
    assert rv.status_code == 400
    assert "Please enter a valid email" in rv.get_data(as_text=True)


def test_home_content(admin_client, client, db):
    rv = admin_client.post("/admin/home-content/hero", data={
        "title": "Sheds Built to Last", "subtitle": "Since 1998", "is_active": "1",
    })
    assert rv.status_code == 302

    db.expire_all()
    hero = db.query(HomeContent).filter_by(section_name="hero").one()
    assert hero.title == "Sheds Built to Last"
    assert "Sheds Built to Last" in client.get("/").get_data(as_text=True)

    assert admin_client.post("/admin/home-content/footer", data={"title": "x"}).status_code == 404
    assert admin_client.post("/admin/home-content/hero", data={"title": ""}).status_code == 400


def test_video_manager(admin_client, client, db):
    rv = admin_client.post("/admin/videos/new", data={"title": "Tour", "video_url": "not a url"})
    assert rv.status_code == 400

    admin_client.post("/admin/videos/new", data={
        "title": "Workshop Tour", "video_url": "https://youtu.be/abc", "order_index": "1", "is_active": "1",
    })
    video = db.query(VideoCarousel).one()
    assert "Workshop Tour" in client.get("/").get_data(as_text=True)

    admin_client.post(f"/admin/videos/{video.id}/toggle")
    assert "Workshop Tour" not in client.get("/").get_data(as_text=True)
