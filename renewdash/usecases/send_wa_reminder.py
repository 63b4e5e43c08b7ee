from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from renewdash.domain.ports import AdminPort, Record, UseCaseError

from .error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)

SENT_MESSAGE = "Pesan WhatsApp berhasil dikirim!"


@dataclass
class SendWaReminder:
    """Send the WhatsApp renewal reminder for one service to its client.

    ``contact_numbers`` are the business's own numbers quoted in the message.
    """

    admin_port: AdminPort
    contact_numbers: Tuple[str, str] = ("", "")

    def build_payload(self, service: Record, client: Record) -> Dict[str, Any]:
        to = str(client.get("whatsapp_number") or "").strip()
        if not to:
            raise UseCaseError("MISSING_PHONE", "Klien belum memiliki nomor WhatsApp")
        return {
            "to": to,
            "service_detail_name": service.get("service_detail_name") or "",
            "service_type_name": service.get("service_type_name") or service.get("service_name") or "",
            "end_time": service.get("end_date") or "",
            "phone_number1": self.contact_numbers[0],
            "phone_number2": self.contact_numbers[1],
        }

    def __call__(self, service_id: Any) -> str:
        try:
            service = self.admin_port.get("services", service_id)
            client = self.admin_port.get("clients", service.get("client_id"))
        except Exception as exc:
            raise map_api_error(exc, default_message="Gagal mengambil data layanan") from exc
        payload = self.build_payload(service, client)
        try:
            self.admin_port.send_wa_reminder(payload)
        except Exception as exc:
            raise map_api_error(exc, default_message="Gagal mengirim pesan WhatsApp") from exc
        LOGGER.info("WhatsApp reminder sent for service %s", service_id)
        return SENT_MESSAGE
