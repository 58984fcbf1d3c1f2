"""
Sales Sheet Verification Script

Checks the integrity of the paid orders sheet written by the Celery worker.
Run from project root: python scripts/verify.py
"""

import os
import sys
from datetime import datetime

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pandas as pd

from comanda.core.config import get_settings

settings = get_settings()
EXCEL_FILE = os.path.join(settings.data_directory, settings.excel_filename)
REQUIRED_COLUMNS = ['order_id', 'customer', 'status', 'total_amount']


def verify_excel() -> bool:
    """Verify the sales sheet after a simulation run."""

    print("=" * 60)
    print("🔍 SALES SHEET VERIFICATION")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"📄 File: {EXCEL_FILE}")
    print("=" * 60)

    if not os.path.exists(EXCEL_FILE):
        print("\n❌ Sales sheet not found!")
        print("   Set EXPORT_PAID_ORDERS=true and run: python scripts/simulate.py")
        return False

    try:
        df = pd.read_excel(EXCEL_FILE, engine='openpyxl')
        print("\n✅ File loaded successfully!")
    except (OSError, ValueError) as e:
        print(f"\n❌ Could not read sales sheet: {e}")
        return False

    print("\n📊 STATISTICS:")
    print(f"   Paid orders: {len(df)}")
    print(f"   Columns: {len(df.columns)}")

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        print(f"\n⚠️ Missing Columns: {missing}")
    else:
        print("\n✅ All required columns present")

    if 'order_id' in df.columns:
        duplicates = df['order_id'].duplicated().sum()
        if duplicates > 0:
            print(f"\n⚠️ {duplicates} duplicate order IDs found!")
        else:
            print("✅ No duplicate order IDs")

    if 'status' in df.columns:
        unpaid = (df['status'] != 'paid').sum()
        if unpaid > 0:
            print(f"⚠️ {unpaid} rows exported with a status other than paid")
        else:
            print("✅ Every row is a paid order")

    if 'total_amount' in df.columns and len(df) > 0:
        print("\n💰 REVENUE:")
        print(f"   Total: R$ {df['total_amount'].sum():.2f}")
        print(f"   Average ticket: R$ {df['total_amount'].mean():.2f}")

    print("\n📋 RECENT ORDERS:")
    print("-" * 60)
    if len(df) > 0:
        cols = [c for c in REQUIRED_COLUMNS if c in df.columns]
        print(df[cols].tail(5).to_string(index=False))

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE")
    print("=" * 60)

    return not missing


if __name__ == "__main__":
    sys.exit(0 if verify_excel() else 1)
