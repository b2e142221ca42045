import pytest

from supportdesk.core.errors import NotFoundError, ValidationError
from supportdesk.models.category import TicketCategory
from supportdesk.schemas.ticket import TicketSubmission
from supportdesk.services import catalog, tenants
from supportdesk.services import tickets as ticket_service


@pytest.fixture
def business(db):
    return tenants.create_business(db, "owner-1", "Acme")


@pytest.fixture
def other_business(db):
    return tenants.create_business(db, "owner-2", "Other")


def test_categories_listed_in_creation_order(db, business):
    for name in ("Delivery", "Refunds", "Other"):
        catalog.add_category(db, business.id, name)
    assert [c.name for c in catalog.list_categories(db, business.id)] == ["Delivery", "Refunds", "Other"]


def test_inactive_categories_are_hidden(db, business):
    catalog.add_category(db, business.id, "Delivery")
    hidden = catalog.add_category(db, business.id, "Legacy")
    hidden.is_active = False
    db.commit()
    assert [c.name for c in catalog.list_categories(db, business.id)] == ["Delivery"]


def test_category_name_trimmed_and_required(db, business):
    assert catalog.add_category(db, business.id, "  Delivery  ").name == "Delivery"
    with pytest.raises(ValidationError):
        catalog.add_category(db, business.id, "   ")


def test_form_categories_fall_back_to_general(db, business):
    assert catalog.form_categories(db, business.id) == ["general"]
    catalog.add_category(db, business.id, "Delivery")
    assert catalog.form_categories(db, business.id) == ["Delivery"]


def test_remove_category_is_hard_delete_and_keeps_ticket_text(db, storage, business):
    category = catalog.add_category(db, business.id, "Delivery")
    ticket = ticket_service.create_ticket(
        db, storage, business.id,
        TicketSubmission(customer_name="Dana", customer_phone="050", category="Delivery", description="Late"),
    )

    catalog.remove_category(db, business.id, category.id)

    assert db.query(TicketCategory).filter(TicketCategory.id == category.id).first() is None
    assert ticket_service.get_ticket(db, business.id, ticket.id).category == "Delivery"


def test_remove_category_of_another_business_is_not_found(db, business, other_business):
    category = catalog.add_category(db, other_business.id, "Theirs")
    with pytest.raises(NotFoundError):
        catalog.remove_category(db, business.id, category.id)
    assert [c.name for c in catalog.list_categories(db, other_business.id)] == ["Theirs"]


def test_builtin_statuses_come_first_then_custom_in_creation_order(db, business):
    catalog.add_status(db, business.id, "Urgent", color="red")
    catalog.add_status(db, business.id, "Waiting for parts", color="purple")

    names = [s.name for s in catalog.list_statuses(db, business.id)]
    assert names == ["new", "in-progress", "closed", "Urgent", "Waiting for parts"]


def test_builtins_present_without_custom_statuses(db, business):
    statuses = catalog.list_statuses(db, business.id)
    assert [s.name for s in statuses] == ["new", "in-progress", "closed"]
    assert all(s.builtin for s in statuses)


def test_custom_status_with_builtin_name_is_not_deduplicated(db, business):
    catalog.add_status(db, business.id, "new", color="blue")
    names = [s.name for s in catalog.list_statuses(db, business.id)]
    assert names.count("new") == 2


def test_status_defaults(db, business):
    status = catalog.add_status(db, business.id, "  Urgent ", description="  ", color="chartreuse")
    assert status.name == "Urgent"
    assert status.description == "Custom status"
    assert status.color == "gray"


def test_status_name_required(db, business):
    with pytest.raises(ValidationError):
        catalog.add_status(db, business.id, "", color="red")


def test_statuses_are_scoped_to_business(db, business, other_business):
    catalog.add_status(db, other_business.id, "Theirs")
    assert "Theirs" not in [s.name for s in catalog.list_statuses(db, business.id)]


def test_remove_status_keeps_ticket_status(db, storage, business):
    status = catalog.add_status(db, business.id, "Urgent", color="red")
    ticket = ticket_service.create_ticket(
        db, storage, business.id,
        TicketSubmission(customer_name="Dana", customer_phone="050", description="Broken"),
    )
    ticket_service.update_ticket_status(db, business.id, ticket.id, "Urgent")

    catalog.remove_status(db, business.id, status.id)

    assert [s.name for s in catalog.list_statuses(db, business.id)] == ["new", "in-progress", "closed"]
    assert ticket_service.get_ticket(db, business.id, ticket.id).status == "Urgent"
