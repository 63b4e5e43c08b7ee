"""Service form with the derived final-price preview.

``final_price`` is recomputed from ``normal_price``, ``is_discount``,
``discount_type`` and ``discount`` whenever one of them changes and is never
set from an input. The backend remains authoritative for the stored price.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Tuple

from renewdash.domain.pricing import DISCOUNT_TYPES, compute_final_price
from renewdash.domain.validation import FieldRule

from .form_vm import FormVM

LOGGER = logging.getLogger(__name__)

PRICE_INPUTS = frozenset({"normal_price", "is_discount", "discount_type", "discount"})
ORDER_TYPES = ("NEW", "RENEWAL")

VENDOR_RULE = FieldRule("vendor_id", kind="choice", required=True, required_message="Vendor wajib dipilih")
RENEWAL_RULE = FieldRule(
    "renewal_service_id",
    kind="choice",
    required=True,
    required_message="Layanan yang diperpanjang wajib dipilih",
)

# Copied from the renewed service; dates stay empty for the new period.
RENEWAL_COPY_FIELDS = (
    "service_detail_name",
    "service_type_id",
    "vendor_id",
    "domain_name",
    "base_price",
    "normal_price",
    "is_discount",
    "discount_type",
    "discount",
    "notes",
    "handled_by",
    "pic",
)


def needs_vendor(service_type: Optional[Mapping[str, Any]]) -> bool:
    if not service_type:
        return False
    return str(service_type.get("is_need_vendor") or "") == "1"


class ServiceFormVM(FormVM):
    """``FormVM`` for ``services`` records."""

    def __init__(self, *args: Any, service_types: Iterable[Mapping[str, Any]] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_types = [dict(row) for row in service_types]
        self.vendor_required = needs_vendor(self._service_type(self.draft.get("service_type_id")))
        self._recompute()

    @property
    def rules(self) -> Tuple[FieldRule, ...]:
        rules = super().rules
        if self.vendor_required:
            rules = rules + (VENDOR_RULE,)
        if self.draft.get("order_type") == "RENEWAL":
            rules = rules + (RENEWAL_RULE,)
        return rules

    @property
    def final_price(self) -> float:
        return float(self.draft.get("final_price") or 0)

    def set_field(self, name: str, value: Any) -> None:
        if name == "final_price":
            LOGGER.debug("final_price is derived; ignoring direct edit")
            return
        if name == "discount_type" and value not in DISCOUNT_TYPES:
            raise ValueError(f"discount_type must be one of {DISCOUNT_TYPES}")
        if name == "order_type" and value not in ORDER_TYPES:
            raise ValueError(f"order_type must be one of {ORDER_TYPES}")
        super().set_field(name, value)
        if name == "order_type" and value == "NEW":
            self.draft["renewal_service_id"] = 0
        if name in PRICE_INPUTS:
            self._recompute()

    def select_service_type(self, service_type_id: Any) -> bool:
        """Apply a service type choice and return whether a vendor is required.

        The type's ``price`` becomes both ``base_price`` and ``normal_price``.
        """
        service_type = self._service_type(service_type_id)
        super().set_field("service_type_id", service_type_id)
        price = (service_type or {}).get("price") or 0
        self.draft["base_price"] = price
        self.draft["normal_price"] = price
        self.vendor_required = needs_vendor(service_type)
        if not self.vendor_required:
            self.draft["vendor_id"] = None
            self.errors.pop("vendor_id", None)
        self._recompute()
        return self.vendor_required

    def select_client(self, client_id: Any) -> None:
        """Choose the client; any previously picked renewal source is reset."""
        super().set_field("client_id", client_id)
        self.draft["renewal_service_id"] = 0

    def apply_renewal_source(self, service: Mapping[str, Any]) -> None:
        """Prefill the draft from the service being renewed."""
        super().set_field("renewal_service_id", service.get("id"))
        for key in RENEWAL_COPY_FIELDS:
            if key in service:
                self.draft[key] = service[key]
        if not self.draft.get("discount_type"):
            self.draft["discount_type"] = "amount"
        self.draft["start_date"] = ""
        self.draft["end_date"] = ""
        self.vendor_required = needs_vendor(self._service_type(self.draft.get("service_type_id")))
        self._recompute()

    def _service_type(self, service_type_id: Any) -> Optional[Mapping[str, Any]]:
        if service_type_id in (None, "", 0):
            return None
        for row in self.service_types:
            if str(row.get("id")) == str(service_type_id):
                return row
        return None

    def _recompute(self) -> None:
        self.draft["final_price"] = compute_final_price(
            self.draft.get("normal_price"),
            bool(self.draft.get("is_discount")),
            str(self.draft.get("discount_type") or "amount"),
            self.draft.get("discount"),
        )


__all__ = ["ORDER_TYPES", "PRICE_INPUTS", "ServiceFormVM", "needs_vendor"]
