"""Contacts: an address book scoped to the principal who created each entry."""

from app.application.resources.definition import ResourceDefinition
from app.application.schemas.contact import ContactCreate, ContactUpdate
from app.domain.entities import SortOrder

CONTACTS = ResourceDefinition(
    name="contacts",
    label="Contact",
    create_schema=ContactCreate,
    update_schema=ContactUpdate,
    owner_scoped=True,
    unique_fields=("email",),
    searchable_fields=("firstName", "lastName", "email", "phone", "company"),
    default_sort="firstName",
    default_order=SortOrder.ASC,
)
