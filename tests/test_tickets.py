from datetime import date, datetime, timezone

import pytest

from supportdesk.core.errors import NotFoundError, RemoteOperationError, ValidationError
from supportdesk.models.ticket import Ticket
from supportdesk.schemas.ticket import TicketSubmission
from supportdesk.services import tenants
from supportdesk.services import tickets as ticket_service
from supportdesk.services.tickets import Attachment


@pytest.fixture
def business(db):
    return tenants.create_business(db, "owner-1", "Acme")


def submission(**overrides):
    values = {
        "customer_name": "Dana Levi",
        "customer_phone": "050-1234567",
        "customer_email": "dana@example.com",
        "category": "Delivery",
        "description": "Order 1182 never arrived",
    }
    values.update(overrides)
    return TicketSubmission(**values)


def add_ticket(db, business_id, status="new", created_at=None):
    ticket = Ticket(
        business_id=business_id,
        customer_name="C",
        customer_phone="1",
        category="general",
        description="d",
        status=status,
    )
    if created_at is not None:
        ticket.created_at = created_at
    db.add(ticket)
    db.commit()
    return ticket


def test_created_ticket_is_listed_immediately(db, storage, business):
    ticket = ticket_service.create_ticket(db, storage, business.id, submission())

    listed = ticket_service.list_tickets(db, business.id)
    assert [t.id for t in listed] == [ticket.id]
    assert listed[0].status == "new"
    assert listed[0].image_url is None


def test_empty_description_fails_without_remote_calls(db, storage, business, query_log):
    query_log.clear()
    with pytest.raises(ValidationError):
        ticket_service.create_ticket(
            db, storage, business.id, submission(description="   "),
            attachment=Attachment("photo.jpg", b"jpeg"),
        )
    assert query_log == []
    assert storage.calls == 0


def test_missing_fields_are_all_reported(db, storage, business):
    with pytest.raises(ValidationError) as exc:
        ticket_service.create_ticket(db, storage, business.id, submission(customer_name="", customer_phone=""))
    assert "name" in exc.value.message
    assert "phone" in exc.value.message


def test_empty_category_defaults_to_general(db, storage, business):
    ticket = ticket_service.create_ticket(db, storage, business.id, submission(category=""))
    assert ticket.category == "general"


def test_blank_email_is_stored_as_null(db, storage, business):
    ticket = ticket_service.create_ticket(db, storage, business.id, submission(customer_email="  "))
    assert ticket.customer_email is None


def test_unknown_business_is_not_found(db, storage):
    with pytest.raises(NotFoundError):
        ticket_service.create_ticket(db, storage, 999, submission())


def test_attachment_is_uploaded_before_insert(db, storage, business):
    ticket = ticket_service.create_ticket(
        db, storage, business.id, submission(),
        attachment=Attachment("Receipt Photo.JPG", b"\xff\xd8", "image/jpeg"),
    )
    [key] = storage.objects
    assert key.endswith(".jpg")
    assert storage.objects[key] == (b"\xff\xd8", "image/jpeg")
    assert ticket.image_url == storage.public_url(key)


def test_attachment_keys_do_not_collide():
    keys = {ticket_service.attachment_key("a.png") for _ in range(200)}
    assert len(keys) == 200


def test_attachment_key_ignores_odd_extensions():
    assert ticket_service.attachment_key("noext").endswith(".bin")
    assert ticket_service.attachment_key("x.p/ng").endswith(".bin")


def test_failed_upload_inserts_nothing(db, storage, business):
    storage.fail = True
    with pytest.raises(RemoteOperationError):
        ticket_service.create_ticket(db, storage, business.id, submission(), attachment=Attachment("a.png", b"png"))
    assert ticket_service.list_tickets(db, business.id) == []


def test_failed_insert_after_upload_leaves_orphaned_attachment(db, engine, storage, business):
    business_id = business.id
    db.close()
    Ticket.__table__.drop(engine)

    with pytest.raises(RemoteOperationError):
        ticket_service.create_ticket(db, storage, business_id, submission(), attachment=Attachment("a.png", b"png"))

    [key] = storage.objects
    assert storage.objects[key] == (b"png", "application/octet-stream")


def test_list_is_newest_first(db, business):
    old = add_ticket(db, business.id, created_at=datetime(2026, 1, 1, 9, tzinfo=timezone.utc))
    new = add_ticket(db, business.id, created_at=datetime(2026, 1, 3, 9, tzinfo=timezone.utc))
    mid = add_ticket(db, business.id, created_at=datetime(2026, 1, 2, 9, tzinfo=timezone.utc))
    assert [t.id for t in ticket_service.list_tickets(db, business.id)] == [new.id, mid.id, old.id]


def test_filter_by_status_scenario(db, business):
    add_ticket(db, business.id, "new")
    add_ticket(db, business.id, "in-progress")
    add_ticket(db, business.id, "new")

    result = ticket_service.list_tickets(db, business.id, status="new")
    assert len(result) == 2
    assert {t.status for t in result} == {"new"}


def test_filter_by_calendar_day(db, business):
    morning = add_ticket(db, business.id, created_at=datetime(2026, 3, 5, 0, 30, tzinfo=timezone.utc))
    add_ticket(db, business.id, created_at=datetime(2026, 3, 4, 23, 59, tzinfo=timezone.utc))
    evening = add_ticket(db, business.id, created_at=datetime(2026, 3, 5, 23, 0, tzinfo=timezone.utc))

    result = ticket_service.list_tickets(db, business.id, day=date(2026, 3, 5))
    assert [t.id for t in result] == [evening.id, morning.id]


def test_tickets_are_scoped_to_business(db, storage, business):
    other = tenants.create_business(db, "owner-2", "Other")
    theirs = ticket_service.create_ticket(db, storage, other.id, submission())

    assert ticket_service.list_tickets(db, business.id) == []
    with pytest.raises(NotFoundError):
        ticket_service.update_ticket_status(db, business.id, theirs.id, "closed")
    with pytest.raises(NotFoundError):
        ticket_service.delete_ticket(db, business.id, theirs.id, confirm=True)


def test_status_updates_are_last_write_wins(db, storage, business):
    ticket = ticket_service.create_ticket(db, storage, business.id, submission())
    for status in ("closed", "in-progress", "totally made up", "new", "in-progress"):
        ticket_service.update_ticket_status(db, business.id, ticket.id, status)
    assert ticket_service.get_ticket(db, business.id, ticket.id).status == "in-progress"


def test_any_transition_is_allowed(db, storage, business):
    ticket = ticket_service.create_ticket(db, storage, business.id, submission())
    ticket_service.update_ticket_status(db, business.id, ticket.id, "closed")
    ticket_service.update_ticket_status(db, business.id, ticket.id, "new")
    assert ticket_service.get_ticket(db, business.id, ticket.id).status == "new"


def test_delete_requires_confirmation(db, storage, business):
    ticket = ticket_service.create_ticket(db, storage, business.id, submission())

    with pytest.raises(ValidationError):
        ticket_service.delete_ticket(db, business.id, ticket.id)
    assert ticket_service.get_ticket(db, business.id, ticket.id)

    ticket_service.delete_ticket(db, business.id, ticket.id, confirm=True)
    with pytest.raises(NotFoundError):
        ticket_service.get_ticket(db, business.id, ticket.id)
