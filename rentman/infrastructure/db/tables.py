from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Text,
    Table,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("company_id", Integer),
    Column("role", String(20), nullable=False),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
)

vehicles = Table(
    "vehicles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("company_id", Integer),
    Column("make", String(100), nullable=False),
    Column("model", String(100), nullable=False),
    Column("license_plate", String(20), nullable=False, unique=True),
    Column("daily_rate", Numeric(12, 2), nullable=False),
    Column("mileage", Integer, nullable=False, default=0),
    Column("status", String(32), nullable=False),
)

reservations = Table(
    "reservations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("reservation_number", String(20), nullable=False, unique=True),
    Column("customer_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("vehicle_id", Integer, ForeignKey("vehicles.id"), nullable=False),
    Column("company_id", Integer),
    Column("handled_by_employee_id", Integer, ForeignKey("users.id")),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    Column("actual_start_date", Date),
    Column("actual_end_date", Date),
    Column("pickup_time", DateTime),
    Column("return_time", DateTime),
    Column("status", String(32), nullable=False),
    Column("daily_rate", Numeric(12, 2), nullable=False),
    Column("total_days", Integer, nullable=False),
    Column("subtotal", Numeric(12, 2), nullable=False),
    Column("tax_amount", Numeric(12, 2), nullable=False),
    Column("insurance_amount", Numeric(12, 2), nullable=False),
    Column("additional_fees", Numeric(12, 2), nullable=False),
    Column("discount_amount", Numeric(12, 2), nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("deposit_amount", Numeric(12, 2), nullable=False),
    Column("amount_paid", Numeric(12, 2), nullable=False),
    Column("pickup_mileage", Integer),
    Column("return_mileage", Integer),
    Column("fuel_level_pickup", String(20)),
    Column("fuel_level_return", String(20)),
    Column("vehicle_condition_pickup", Text),
    Column("vehicle_condition_return", Text),
    Column("insurance_included", Boolean, nullable=False, default=False),
    Column("additional_driver", Boolean, nullable=False, default=False),
    Column("gps_included", Boolean, nullable=False, default=False),
    Column("child_seat_included", Boolean, nullable=False, default=False),
    Column("pickup_location", String(255)),
    Column("return_location", String(255)),
    Column("special_requests", Text),
    Column("notes", Text),
    Column("cancellation_reason", Text),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
    Column("confirmed_at", DateTime),
    Column("completed_at", DateTime),
    Column("cancelled_at", DateTime),
    Index("ix_reservations_vehicle_dates", "vehicle_id", "start_date", "end_date"),
    Index("ix_reservations_status", "status"),
    Index("ix_reservations_customer", "customer_id"),
)
