"""
SQLAlchemy Database Models

Tables behind the SQL store. Nested order data (item, address) and the
house special ingredient list are kept as JSON text, the same shape the
API exchanges.
"""

from sqlalchemy import Column, String, Float, DateTime, Text, Enum, Boolean, Integer

from sabor.database import Base
from sabor.schemas import DrinkType, OrderStatus, RecordType


class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Ingredient {self.id} - {self.name}>"


class HouseSpecial(Base):
    __tablename__ = "house_specials"

    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    ingredients = Column(Text, nullable=False)  # JSON list of ingredient ids
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<HouseSpecial {self.id} - {self.name}>"


class Drink(Base):
    __tablename__ = "drinks"

    id = Column(String(64), primary_key=True)
    type = Column(Enum(DrinkType), nullable=False)
    name = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Drink {self.id} - {self.name} - {self.price}>"


class Order(Base):
    """
    Customer order.

    ``total`` is fixed at creation; only ``status``, ``delivered`` and
    ``updated_at`` change afterwards.
    """
    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)

    # =========================================================================
    # ORDER DETAILS
    # =========================================================================
    item = Column(Text, nullable=False)  # JSON OrderItem
    address = Column(Text, nullable=False)  # JSON Address
    customer_name = Column(Text, nullable=False)
    customer_phone = Column(Text, nullable=False, index=True)
    total = Column(Float, nullable=False)
    payment_method = Column(Text, nullable=False)

    # =========================================================================
    # STATUS
    # =========================================================================
    status = Column(Enum(OrderStatus), default=OrderStatus.PENDENTE, nullable=False, index=True)
    delivered = Column(Boolean, default=False, nullable=False)

    # =========================================================================
    # TIMESTAMPS
    # =========================================================================
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Order {self.id} - {self.customer_name} - {self.status.value}>"


class FinancialRecord(Base):
    """Append-only ledger line. ``order_id`` holds an order or expense id."""
    __tablename__ = "financial_records"

    id = Column(String(80), primary_key=True)
    order_id = Column(String(64), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    type = Column(Enum(RecordType), nullable=False, index=True)
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<FinancialRecord {self.id} - {self.type.value} - {self.amount}>"


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(64), primary_key=True)
    description = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    installments = Column(Integer, nullable=False)
    monthly_amount = Column(Float, nullable=False)
    start_date = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Expense {self.id} - {self.description} - {self.installments}x>"
