"""
Expense Recorder

Records a lump expense and spreads it over monthly installments in the
financial ledger as ``saida`` records.

Installment rules:
    - monthly_amount = amount / installments, no rounding correction
      (the last installment does not absorb the float remainder)
    - installment i is dated start_date + i calendar months; pandas
      DateOffset clamps to the month end (Jan 31 + 1 month = Feb 28/29)
    - descriptions get an "(i/N)" suffix only when N > 1
"""

import logging
import math
import numbers
from datetime import datetime
from typing import Optional

import pandas as pd

from sabor.core.exceptions import InvalidExpenseError
from sabor.schemas import Expense, FinancialRecord, RecordType
from sabor.services.ids import new_id
from sabor.services.storage.base import BaseStore

logger = logging.getLogger(__name__)


def installment_date(start_date: datetime, offset: int) -> datetime:
    """Shift start_date by ``offset`` calendar months."""
    return (pd.Timestamp(start_date) + pd.DateOffset(months=offset)).to_pydatetime()


def build_installment_records(expense: Expense) -> list[FinancialRecord]:
    """One saida record per installment, linked to the expense id."""
    records = []
    for i in range(expense.installments):
        description = (
            f"{expense.description} ({i + 1}/{expense.installments})"
            if expense.installments > 1
            else expense.description
        )
        records.append(FinancialRecord(
            id=new_id(f"finance_expense_{i}"),
            order_id=expense.id,
            amount=expense.monthly_amount,
            type=RecordType.SAIDA,
            description=description,
            date=installment_date(expense.start_date, i),
        ))
    return records


def validate_expense(description: str, amount: float, installments: int) -> None:
    if not description or not description.strip():
        raise InvalidExpenseError("Descrição, valor e parcelas são obrigatórios.")
    if isinstance(installments, bool) or not isinstance(installments, numbers.Integral):
        raise InvalidExpenseError("O número de parcelas deve ser inteiro.")
    if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
        raise InvalidExpenseError("Valor inválido.")
    if not (math.isfinite(amount) and amount > 0) or installments < 1:
        raise InvalidExpenseError()


class ExpenseService:
    """Adds and lists expenses against a store."""

    def __init__(self, store: BaseStore):
        self.store = store

    async def add_expense(
        self,
        description: str,
        amount: float,
        installments: int,
        now: Optional[datetime] = None,
    ) -> Expense:
        """
        Record an expense and its installment records.

        Args:
            description: What the money was spent on
            amount: Total amount, > 0
            installments: Number of monthly slices, integer >= 1
            now: Start date override (defaults to the current time)

        Returns:
            Expense: The stored expense summary

        Raises:
            InvalidExpenseError: On missing description, amount not finite and > 0 or
                installments < 1 / not an integer
        """
        validate_expense(description, amount, installments)

        start_date = now or datetime.now()
        expense = Expense(
            id=new_id("expense"),
            description=description,
            amount=amount,
            installments=installments,
            monthly_amount=amount / installments,
            start_date=start_date,
            created_at=start_date,
        )
        records = build_installment_records(expense)

        async with self.store.lock:
            await self.store.append_expense(expense)
            await self.store.append_financial_records(records)

        logger.info(
            f"Expense {expense.id} recorded: {amount:.2f} in {installments}x "
            f"of {expense.monthly_amount:.2f}"
        )
        return expense

    async def list_expenses(self) -> list[Expense]:
        """All expenses, newest first."""
        expenses = await self.store.list_expenses()
        return sorted(expenses, key=lambda e: e.created_at, reverse=True)


def expense_message(expense: Expense) -> str:
    message = f"Despesa de R$ {expense.amount:.2f} adicionada com sucesso!"
    if expense.installments > 1:
        message += (
            f" Dividida em {expense.installments} parcelas de "
            f"R$ {expense.monthly_amount:.2f}."
        )
    return message
