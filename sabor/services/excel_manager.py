"""
Ledger Spreadsheet Export

Writes the period-filtered financial records to CSV or Excel under the
data directory, with file locking so two admins exporting the same
period on the same day never interleave writes.

Columns: Data, Tipo, Descrição, Valor
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional

import pandas as pd
from filelock import FileLock, Timeout

from sabor.core.config import get_settings
from sabor.schemas import ExportFormat, FinancialRecord, RecordType

logger = logging.getLogger(__name__)


class ExcelManager:
    """Thread-safe ledger export."""

    EXPORT_COLUMNS = ["Data", "Tipo", "Descrição", "Valor"]

    @classmethod
    def _ensure_data_dir(cls, data_dir: Path) -> None:
        """Create data directory if needed."""
        if not data_dir.exists():
            data_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created data directory: {data_dir}")

    @classmethod
    def records_to_dataframe(cls, records: Iterable[FinancialRecord]) -> pd.DataFrame:
        rows = [
            {
                "Data": record.date.strftime("%d/%m/%Y"),
                "Tipo": "Entrada" if record.type == RecordType.ENTRADA else "Saída",
                "Descrição": record.description,
                "Valor": round(record.amount, 2),
            }
            for record in records
        ]
        return pd.DataFrame(rows, columns=cls.EXPORT_COLUMNS)

    @classmethod
    def export_filename(cls, period: str, export_format: ExportFormat, now: datetime) -> str:
        return f"financas-{period}-{now:%Y-%m-%d}.{export_format.value}"

    @classmethod
    def export_finances(
        cls,
        records: Iterable[FinancialRecord],
        period: str,
        export_format: ExportFormat = ExportFormat.CSV,
        data_dir: Optional[Path] = None,
        now: Optional[datetime] = None,
    ) -> dict[str, Any]:
        """
        Export records to ``financas-{period}-{YYYY-MM-DD}.{csv|xlsx}``.

        Returns:
            dict with success, message, file_path and row count
        """
        settings = get_settings()
        data_dir = data_dir or settings.data_path
        cls._ensure_data_dir(data_dir)

        now = now or datetime.now()
        file_path = data_dir / cls.export_filename(period, export_format, now)
        lock_path = file_path.with_name(file_path.name + ".lock")

        result = {
            "success": False,
            "message": "",
            "file_path": None,
            "rows": 0,
        }

        df = cls.records_to_dataframe(records)

        try:
            lock = FileLock(str(lock_path), timeout=settings.export_lock_timeout)

            with lock:
                logger.debug(f"Lock acquired for {file_path.name}")

                if export_format == ExportFormat.XLSX:
                    df.to_excel(str(file_path), index=False, engine="openpyxl")
                else:
                    df.to_csv(str(file_path), index=False, encoding="utf-8")

                logger.info(f"Ledger exported: {file_path} ({len(df)} rows)")

                result["success"] = True
                result["message"] = f"{len(df)} registros exportados"
                result["file_path"] = file_path
                result["rows"] = len(df)

            logger.debug(f"Lock released for {file_path.name}")

        except Timeout:
            result["message"] = f"Lock timeout ({settings.export_lock_timeout}s)"
            logger.error(f"Lock timeout exporting {file_path.name}")

        except OSError as e:
            result["message"] = str(e)
            logger.exception(f"Error exporting {file_path.name}")

        return result
