"""
Ledger Export Verification Script

Summarises a ledger export produced by GET /api/finances/export.
Run from project root: python scripts/verify.py data/financas-mes-2024-05-31.csv
"""

import os
import sys
from datetime import datetime

import pandas as pd

REQUIRED_COLUMNS = ["Data", "Tipo", "Descrição", "Valor"]


def load_export(path: str) -> pd.DataFrame:
    if path.endswith(".xlsx"):
        return pd.read_excel(path, engine="openpyxl")
    return pd.read_csv(path)


def verify_export(path: str) -> bool:
    """Check columns and print the entrada/saida balance."""

    print("=" * 60)
    print("🔍 LEDGER EXPORT REPORT")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"📄 File: {path}")
    print("=" * 60)

    if not os.path.exists(path):
        print("\n❌ Export file not found!")
        print("   Download one first: GET /api/finances/export?period=mes")
        return False

    try:
        df = load_export(path)
        print("\n✅ File loaded successfully!")
    except (OSError, ValueError) as e:
        print(f"\n❌ Could not read export: {e}")
        return False

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        print(f"\n⚠️ Missing Columns: {missing}")
        return False
    print("✅ All required columns present")

    revenue = df.loc[df["Tipo"] == "Entrada", "Valor"].sum()
    expenses = df.loc[df["Tipo"] == "Saída", "Valor"].sum()

    print("\n📊 STATISTICS:")
    print(f"   Records: {len(df)}")
    print(f"   Entradas: R$ {revenue:.2f}")
    print(f"   Saídas: R$ {expenses:.2f}")
    print(f"   Lucro líquido: R$ {revenue - expenses:.2f}")

    print("\n📋 LATEST RECORDS:")
    print("-" * 60)
    if len(df) > 0:
        print(df.head(5).to_string(index=False))

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE")
    print("=" * 60)

    return True


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/verify.py <export file>")
        sys.exit(2)
    sys.exit(0 if verify_export(sys.argv[1]) else 1)
