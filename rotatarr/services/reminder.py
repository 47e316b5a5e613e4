"""Monthly reminder telling a user what to cancel and what to subscribe to next.

Only composes the message; sending it is left to whatever mail transport the
deployment uses.
"""

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel

from rotatarr.core.config import get_settings
from rotatarr.models.plan import RollingPlan
from rotatarr.providers import ServiceRegistry

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


class RollingReminder(BaseModel):
    """What the user should do at the turn of the month."""

    cancel_service: Optional[str] = None
    cancel_url: Optional[str] = None
    cancel_by: str
    subscribe_service: Optional[str] = None
    subscribe_month_key: str
    subscribe_month_label: str


class ReminderMessage(BaseModel):
    subject: str
    text: str
    html: str


def compose_reminder(plan: RollingPlan) -> RollingReminder:
    """Read this month's and next month's assignments off a rolling plan."""
    current, upcoming = plan.months[0], plan.months[1]
    cancel_service = plan.plan[current.key].service
    subscribe_service = plan.plan[upcoming.key].service

    service = ServiceRegistry.lookup(cancel_service)
    return RollingReminder(
        cancel_service=cancel_service,
        cancel_url=service.cancel_url if service else None,
        cancel_by=f"end of {current.label}",
        subscribe_service=subscribe_service,
        subscribe_month_key=upcoming.key,
        subscribe_month_label=upcoming.label,
    )


def render_reminder(reminder: RollingReminder) -> ReminderMessage:
    settings = get_settings()
    context = {
        "reminder": reminder,
        "app_name": settings.app_name,
        "app_url": settings.app_url,
    }
    return ReminderMessage(
        subject=(
            f"Reminder: {reminder.subscribe_month_label} - "
            f"{settings.app_name} rolling plan"
        ),
        text=_env.get_template("reminder.txt").render(**context).strip(),
        html=_env.get_template("reminder.html").render(**context).strip(),
    )
