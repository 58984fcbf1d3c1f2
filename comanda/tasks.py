"""
Celery Tasks
Background export of paid orders to the sales sheet.
"""

import logging
import time
from datetime import datetime

from comanda.celery_worker import celery_app
from comanda.services.excel_manager import ExcelManager

logger = logging.getLogger(__name__)


class ExportFailed(Exception):
    """The sheet could not be written; Celery retries the task."""


@celery_app.task(
    bind=True,
    max_retries=3,
    default_retry_delay=5,
    autoretry_for=(ExportFailed,),
    retry_backoff=True
)
def export_order_to_excel(self, order_data: dict) -> dict:
    """
    Append a paid order to the sales sheet.
    This task runs asynchronously via Celery worker.

    Args:
        order_data: Snapshot built by excel_manager.order_payload

    Returns:
        dict: Result of the export operation
    """
    task_id = self.request.id
    order_id = order_data.get('order_id', 'unknown')

    logger.info(f"📋 Task {task_id}: Exporting order {order_id}")
    start_time = time.time()

    result = ExcelManager().export_order(order_data)

    elapsed = round(time.time() - start_time, 3)
    result['task_id'] = task_id
    result['processing_time_seconds'] = elapsed

    if not result['success']:
        logger.warning(f"⚠️ Task {task_id}: Order {order_id} failed - {result['message']}")
        raise ExportFailed(result['message'])

    logger.info(f"✅ Task {task_id}: Order {order_id} completed in {elapsed}s")
    return result


@celery_app.task
def health_check() -> dict:
    """
    Simple health check task to verify Celery is working.
    """
    return {
        'status': 'healthy',
        'worker': 'celery',
        'timestamp': datetime.now().isoformat()
    }


@celery_app.task
def clear_excel_file() -> dict:
    """
    Clear the sales sheet (for testing/reset purposes).
    """
    success = ExcelManager().clear_all()
    return {
        'success': success,
        'message': 'Excel file cleared' if success else 'Failed to clear Excel file',
        'timestamp': datetime.now().isoformat()
    }
