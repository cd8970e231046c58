"""
utils/notify.py
-----------------
Best-effort notifications after an attendance event:

* WhatsApp message through the Fonnte API (form-encoded POST)
* a row for the Google Sheets recap (JSON POST to an Apps Script URL)

Both run after the attendance write is committed. Failures are logged
and dropped; nothing is retried or queued.
"""

import logging
import threading

import requests
from flask import current_app

from utils.clock import format_datetime, format_time, local_tz

logger = logging.getLogger(__name__)


class Notifier:

    def __init__(self, fonnte_url=None, fonnte_token=None, fonnte_target=None,
                 sheet_url=None, timeout=10, tz=None):
        self.fonnte_url = fonnte_url
        self.fonnte_token = fonnte_token
        self.fonnte_target = fonnte_target
        self.sheet_url = sheet_url
        self.timeout = timeout
        self.tz = tz

    @classmethod
    def from_config(cls, config):
        return cls(
            fonnte_url=config.get("FONNTE_URL"),
            fonnte_token=config.get("FONNTE_TOKEN"),
            fonnte_target=config.get("FONNTE_TARGET"),
            sheet_url=config.get("GOOGLE_SCRIPT_URL"),
            timeout=config.get("NOTIFY_TIMEOUT", 10),
            tz=local_tz(),
        )

    # ---------------------------------------------
    # Payloads
    # ---------------------------------------------
    def build_message(self, label, name, when):
        return f"{label}!\nNama: {name}\nWaktu: {format_datetime(when, self.tz)}"

    def build_sheet_row(self, name, entry):
        clock_out = entry.get("clock_out")
        return {
            "name": name,
            "clockIn": format_time(entry["clock_in"], self.tz),
            "clockOut": format_time(clock_out, self.tz) if clock_out else "",
        }

    # ---------------------------------------------
    # Senders
    # ---------------------------------------------
    def send_whatsapp(self, message):
        if not (self.fonnte_url and self.fonnte_token and self.fonnte_target):
            logger.info("[WA] Not configured, skipped")
            return False
        try:
            resp = requests.post(
                self.fonnte_url,
                data={"target": self.fonnte_target, "message": message},
                headers={"Authorization": self.fonnte_token},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except Exception as e:
            logger.error("[WA] Gagal kirim: %s", e)
            return False
        logger.info("[WA] Terkirim")
        return True

    def send_sheet(self, row):
        if not self.sheet_url:
            logger.info("[GS] Not configured, skipped")
            return False
        try:
            resp = requests.post(self.sheet_url, json=row, timeout=self.timeout)
            resp.raise_for_status()
        except Exception as e:
            logger.error("[GS] Gagal kirim ke spreadsheet: %s", e)
            return False
        logger.info("[GS] Data absen terkirim ke spreadsheet")
        return True

    def notify(self, label, name, entry, when):
        """Send both notifications; each failure is isolated from the other."""
        self.send_sheet(self.build_sheet_row(name, entry))
        self.send_whatsapp(self.build_message(label, name, when))


def dispatch_attendance_event(label, name, entry, when):
    """
    Fire the notifications for one attendance event. Runs on a daemon
    thread unless NOTIFY_SYNC is set (tests).
    """
    notifier = Notifier.from_config(current_app.config)

    if current_app.config.get("NOTIFY_SYNC"):
        notifier.notify(label, name, entry, when)
        return None

    thread = threading.Thread(
        target=notifier.notify,
        args=(label, name, dict(entry), when),
        name="attendance-notify",
        daemon=True,
    )
    thread.start()
    return thread
