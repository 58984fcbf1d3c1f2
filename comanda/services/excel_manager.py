"""
Excel Sales Sheet with Concurrency Control

Appends one row per paid order to the sales spreadsheet.
Concurrent Celery workers are serialized with a file lock.

Version: 1.0.0
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import pandas as pd
from filelock import FileLock, Timeout

from comanda.core.config import get_settings
from comanda.entities import Order

logger = logging.getLogger(__name__)


def order_payload(order: Order) -> dict[str, Any]:
    """JSON-safe snapshot of an order for the export task."""
    return {
        "order_id": order.id,
        "customer": order.customer,
        "status": order.status.value,
        "created_at": order.created_at.isoformat(),
        "items": json.dumps(
            [
                {
                    "name": item.name,
                    "price": item.price,
                    "quantity": item.quantity,
                    "details": item.details,
                    "observation": item.observation,
                    "is_marmitex": item.is_marmitex,
                }
                for item in order.items
            ],
            ensure_ascii=False,
        ),
        "item_count": order.item_count,
        "total_amount": order.total,
    }


class ExcelManager:
    """Process- and thread-safe sales sheet writer."""

    ORDER_COLUMNS = [
        "order_id",
        "date_time",
        "customer",
        "status",
        "items",
        "item_count",
        "total_amount",
        "exported_at",
    ]

    def __init__(
        self,
        data_directory: Optional[str] = None,
        filename: Optional[str] = None,
        lock_timeout: Optional[int] = None,
    ):
        settings = get_settings()
        self.data_dir = Path(data_directory or settings.data_directory)
        self.orders_file = self.data_dir / (filename or settings.excel_filename)
        self.lock_file = self.data_dir / f"{self.orders_file.name}.lock"
        self.lock_timeout = lock_timeout if lock_timeout is not None else settings.excel_lock_timeout

    def _ensure_data_dir(self) -> None:
        """Create data directory if needed."""
        if not self.data_dir.exists():
            self.data_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created data directory: {self.data_dir}")

    def _load_or_create_df(self) -> pd.DataFrame:
        """Load existing file or create new DataFrame."""
        if self.orders_file.exists():
            try:
                return pd.read_excel(self.orders_file, engine="openpyxl")
            except Exception as e:
                logger.warning(f"Error reading {self.orders_file}: {e}")
                return pd.DataFrame(columns=self.ORDER_COLUMNS)
        return pd.DataFrame(columns=self.ORDER_COLUMNS)

    def export_order(self, order_data: dict[str, Any]) -> dict[str, Any]:
        """Append one order to the sheet with file locking."""
        self._ensure_data_dir()

        order_id = order_data.get("order_id", "unknown")
        result = {
            "success": False,
            "message": "",
            "order_id": order_id,
            "exported_at": None,
        }

        try:
            lock = FileLock(str(self.lock_file), timeout=self.lock_timeout)

            with lock:
                logger.debug(f"Lock acquired for Order {order_id}")

                df = self._load_or_create_df()

                export_time = datetime.now().isoformat()
                new_row = {
                    "order_id": order_id,
                    "date_time": order_data.get("created_at", export_time),
                    "customer": order_data.get("customer"),
                    "status": order_data.get("status"),
                    "items": order_data.get("items"),
                    "item_count": order_data.get("item_count", 0),
                    "total_amount": order_data.get("total_amount"),
                    "exported_at": export_time,
                }

                new_df = pd.DataFrame([new_row], columns=self.ORDER_COLUMNS)
                df = new_df if df.empty else pd.concat([df, new_df], ignore_index=True)
                df.to_excel(str(self.orders_file), index=False, engine="openpyxl")

                logger.info(f"Order {order_id} exported to Excel")

                result["success"] = True
                result["message"] = f"Order {order_id} exported"
                result["exported_at"] = export_time

            logger.debug(f"Lock released for Order {order_id}")

        except Timeout:
            result["message"] = f"Lock timeout ({self.lock_timeout}s)"
            logger.error(f"Lock timeout for Order {order_id}")

        except Exception as e:
            result["message"] = str(e)
            logger.exception(f"Error exporting Order {order_id}")

        return result

    def get_all_orders(self) -> list[dict[str, Any]]:
        """Get all exported orders."""
        if not self.orders_file.exists():
            return []

        try:
            df = pd.read_excel(self.orders_file, engine="openpyxl")
            return df.to_dict("records")
        except Exception as e:
            logger.error(f"Error reading orders: {e}")
            return []

    def clear_all(self) -> bool:
        """Delete the sheet and its lock file."""
        try:
            for f in [self.orders_file, self.lock_file]:
                if f.exists():
                    f.unlink()
            logger.info("Sales sheet cleared")
            return True
        except OSError as e:
            logger.error(f"Error clearing files: {e}")
            return False
