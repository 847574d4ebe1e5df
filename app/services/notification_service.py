# app/services/notification_service.py
"""
Work order notifications.
Currently log-only. Extend here to add push notifications, SMS, email, etc.
"""

from app.models.work_order import WorkOrder
from app.utils.logger import get_logger

logger = get_logger(__name__)


def notify_work_order_created(work_order: WorkOrder, unit_number: str):
    number = f"#{work_order.work_order_number}" if work_order.work_order_number else "(unnumbered)"
    logger.warning(
        f"[NOTIFY][{work_order.priority.upper()}] Work order {number} opened for unit {unit_number}: "
        f"{work_order.description}"
    )
