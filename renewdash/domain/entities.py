"""Resource catalogue for the admin backend.

Records themselves are plain ``dict`` attribute bags mirrored from the API.
Each :class:`ResourceSpec` describes how one resource is listed, which fields
a create/edit draft starts with, and which fields must pass validation before
submission.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from .validation import FieldRule

AUDIT_FIELDS: Tuple[str, ...] = ("created_by", "created_date", "modified_by", "modified_date")


@dataclass(frozen=True)
class Column:
    """Table column shown on a list screen."""
    key: str
    label: str
    sortable: bool = True


@dataclass(frozen=True)
class ResourceSpec:
    """Static description of one backend resource.

    Attributes:
        name: Resource key and API path segment (``/api/<name>``).
        label: Human-readable singular label.
        columns: List-screen columns; sortable ones may be sent as ``order_by``.
        default_sort: Initial ``order_by`` column.
        defaults: Blank draft used by create forms.
        create_rules: Validation applied on create.
        update_rules: Validation applied on edit.
        writable: ``False`` for lookup-only resources such as roles.
    """
    name: str
    label: str
    columns: Tuple[Column, ...]
    default_sort: str = "id"
    defaults: Mapping[str, Any] = field(default_factory=dict)
    create_rules: Tuple[FieldRule, ...] = ()
    update_rules: Tuple[FieldRule, ...] = ()
    writable: bool = True

    @property
    def path(self) -> str:
        return f"/api/{self.name}"

    def item_path(self, record_id: Any) -> str:
        return f"{self.path}/id/{record_id}"

    @property
    def all_path(self) -> str:
        return f"{self.path}/all"

    @property
    def sortable_fields(self) -> Tuple[str, ...]:
        return tuple(col.key for col in self.columns if col.sortable)

    def blank_draft(self) -> Dict[str, Any]:
        return dict(self.defaults)


def _name_rule(message: str = "Nama wajib diisi") -> FieldRule:
    return FieldRule("name", required=True, required_message=message)


_DESCRIPTION_RULE = FieldRule(
    "description", required=True, required_message="Description wajib diisi"
)

_CLIENT_RULES = (
    _name_rule("Nama klien wajib diisi"),
    FieldRule("client_type_id", kind="choice", required=True, required_message="Tipe klien wajib dipilih"),
    FieldRule("email", kind="email"),
    FieldRule("whatsapp_number", kind="phone"),
)

_USER_UPDATE_RULES = (
    _name_rule(),
    FieldRule("username", required=True, required_message="Username wajib diisi"),
    FieldRule("email", kind="email", required=True, required_message="Email wajib diisi"),
    FieldRule("role_id", kind="choice", required=True, required_message="Role wajib dipilih"),
)

_USER_CREATE_RULES = _USER_UPDATE_RULES + (
    FieldRule(
        "password",
        required=True,
        required_message="Password wajib diisi",
        min_length=8,
        min_length_message="Password minimal 8 karakter",
    ),
)

_SERVICE_RULES = (
    FieldRule("service_detail_name", required=True, required_message="Nama layanan wajib diisi"),
    FieldRule("client_id", kind="choice", required=True, required_message="Klien wajib dipilih"),
    FieldRule("service_type_id", kind="choice", required=True, required_message="Tipe layanan wajib dipilih"),
    FieldRule("normal_price", kind="number", format_message="Harga normal tidak valid"),
    FieldRule("discount", kind="number", format_message="Diskon tidak valid"),
    FieldRule("start_date", required=True, required_message="Tanggal mulai wajib diisi"),
    FieldRule("end_date", required=True, required_message="Tanggal berakhir wajib diisi"),
)

_SERVICE_TYPE_RULES = (
    _name_rule("Nama service type wajib diisi"),
    _DESCRIPTION_RULE,
    FieldRule("price", kind="number", format_message="Harga tidak valid"),
    FieldRule(
        "service_category_id",
        kind="choice",
        required=True,
        required_message="Service Category wajib dipilih",
    ),
)

_LOOKUP_RULES = (_name_rule(), _DESCRIPTION_RULE)

_LOOKUP_COLUMNS = (
    Column("id", "ID"),
    Column("name", "Nama"),
    Column("description", "Deskripsi"),
    Column("created_by", "Dibuat oleh", sortable=False),
)


RESOURCES: Dict[str, ResourceSpec] = {
    spec.name: spec
    for spec in (
        ResourceSpec(
            name="clients",
            label="Klien",
            columns=(
                Column("id", "ID"),
                Column("name", "Nama"),
                Column("client_type_name", "Tipe"),
                Column("whatsapp_number", "WhatsApp", sortable=False),
                Column("email", "Email"),
                Column("created_date", "Dibuat"),
            ),
            default_sort="created_date",
            defaults={"name": "", "client_type_id": 0, "address": "", "whatsapp_number": "", "email": ""},
            create_rules=_CLIENT_RULES,
            update_rules=_CLIENT_RULES,
        ),
        ResourceSpec(
            name="services",
            label="Layanan",
            columns=(
                Column("id", "ID"),
                Column("service_detail_name", "Layanan"),
                Column("client_name", "Klien"),
                Column("service_name", "Tipe"),
                Column("vendor_name", "Vendor"),
                Column("final_price", "Harga Akhir"),
                Column("status_name", "Status"),
                Column("end_date", "Berakhir"),
            ),
            defaults={
                "service_detail_name": "",
                "client_id": None,
                "service_type_id": None,
                "vendor_id": None,
                "domain_name": "",
                "base_price": 0,
                "normal_price": 0,
                "is_discount": False,
                "discount_type": "amount",
                "discount": 0,
                "final_price": 0,
                "notes": "",
                "start_date": "",
                "end_date": "",
                "handled_by": "",
                "status": 1,
                "pic": "",
                "order_type": "NEW",
                "renewal_service_id": 0,
            },
            create_rules=_SERVICE_RULES,
            update_rules=_SERVICE_RULES,
        ),
        ResourceSpec(
            name="vendors",
            label="Vendor",
            columns=_LOOKUP_COLUMNS,
            defaults={"name": "", "description": ""},
            create_rules=_LOOKUP_RULES,
            update_rules=_LOOKUP_RULES,
        ),
        ResourceSpec(
            name="users",
            label="User",
            columns=(
                Column("id", "ID"),
                Column("name", "Nama"),
                Column("username", "Username"),
                Column("email", "Email"),
                Column("role_name", "Role"),
            ),
            defaults={"name": "", "username": "", "email": "", "password": "", "role_id": 0},
            create_rules=_USER_CREATE_RULES,
            update_rules=_USER_UPDATE_RULES,
        ),
        ResourceSpec(
            name="roles",
            label="Role",
            columns=(Column("id", "ID"), Column("name", "Nama"), Column("description", "Deskripsi")),
            writable=False,
        ),
        ResourceSpec(
            name="client_types",
            label="Tipe Klien",
            columns=_LOOKUP_COLUMNS,
            defaults={"name": "", "description": ""},
            create_rules=_LOOKUP_RULES,
            update_rules=_LOOKUP_RULES,
        ),
        ResourceSpec(
            name="client_statuses",
            label="Status Klien",
            columns=_LOOKUP_COLUMNS,
            defaults={"name": "", "description": ""},
            create_rules=_LOOKUP_RULES,
            update_rules=_LOOKUP_RULES,
        ),
        ResourceSpec(
            name="service_types",
            label="Tipe Layanan",
            columns=(
                Column("id", "ID"),
                Column("name", "Nama"),
                Column("description", "Deskripsi"),
                Column("price", "Harga"),
                Column("service_category_name", "Kategori"),
            ),
            defaults={
                "name": "",
                "description": "",
                "price": 0,
                "is_need_vendor": "0",
                "service_category_id": 0,
            },
            create_rules=_SERVICE_TYPE_RULES,
            update_rules=_SERVICE_TYPE_RULES,
        ),
        ResourceSpec(
            name="service_categories",
            label="Kategori Layanan",
            columns=_LOOKUP_COLUMNS,
            defaults={"name": "", "description": ""},
            create_rules=_LOOKUP_RULES,
            update_rules=_LOOKUP_RULES,
        ),
    )
}


def resource_spec(name: str) -> ResourceSpec:
    try:
        return RESOURCES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown resource '{name}'") from exc


__all__ = ["AUDIT_FIELDS", "Column", "RESOURCES", "ResourceSpec", "resource_spec"]
