"""Shareable monthly report text and the WhatsApp handoff link."""
import re
from datetime import date
from urllib.parse import quote

from field_report.aggregate import MonthSummary
from field_report.errors import MissingContactError
from field_report.models import UserProfile
from field_report.periods import month_year_label
from field_report.timecalc import format_time

DEFAULT_NAME = "Pioneiro"
SIGNATURE = "_Enviado com amor pelo Meu Relatório_ 🕊️"


def build_message(profile: UserProfile, summary: MonthSummary) -> str:
    label = month_year_label(date(summary.year, summary.month, 1)).upper()
    field_time = summary.field_time
    credit_time = summary.credit_time
    return (
        f"*Meu Relatório – {label}*\n\n"
        f"*Nome:* {profile.name or DEFAULT_NAME}\n"
        f"*Horas de Campo:* {format_time(field_time.hours, field_time.minutes)}\n"
        f"*Estudos Bíblicos:* {summary.studies}\n"
        f"*Créditos Extras:* {format_time(credit_time.hours, credit_time.minutes)}\n\n"
        f"{SIGNATURE}"
    )


def destination_number(raw: str) -> str:
    return re.sub(r"\D", "", raw or "")


def share_url(profile: UserProfile, message: str) -> str:
    """Build the wa.me deep link for the report.

    Raises MissingContactError when no number is configured.
    """
    if not profile.whatsapp_number:
        raise MissingContactError("set a WhatsApp number in settings first")
    return f"https://wa.me/{destination_number(profile.whatsapp_number)}?text={quote(message, safe='')}"
