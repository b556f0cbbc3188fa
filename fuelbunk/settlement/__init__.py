# -*- coding: utf-8 -*-
"""Duty settlement and reconciliation engine.

Pure functions over the records in ``records``. Persistence goes through the
store protocols in ``stores``; nothing here touches Flask or the database.
"""
from .errors import FieldError, NotFoundError, SettlementError, StateError, ValidationError
from .records import (
    AttendanceRecord, DailySale, DutySettlement, DutyState, FuelType, MonthlySalaryRecord,
    Payments, Prices, PumpInput, PumpReading, SaleItem, WorkerRef,
)
from .pumps import validate_pump_reading
from .duty import open_duty, close_duty, get_duty, submit_duty
from .aggregate import daily_stats, weekly_trend, DailyStats, TrendPoint, WorkerStat
from .salary import monthly_salary, salary_report, report_totals
from .attendance import mark_auto_present, save_manual_sheet, monthly_presence
from .sales import record_daily_sales, sales_total
from .stores import MemoryAttendanceStore, MemoryDutyStore, MemorySalesStore

__all__ = [
    "FieldError", "NotFoundError", "SettlementError", "StateError", "ValidationError",
    "AttendanceRecord", "DailySale", "DutySettlement", "DutyState", "FuelType", "MonthlySalaryRecord",
    "Payments", "Prices", "PumpInput", "PumpReading", "SaleItem", "WorkerRef",
    "validate_pump_reading",
    "open_duty", "close_duty", "get_duty", "submit_duty",
    "daily_stats", "weekly_trend", "DailyStats", "TrendPoint", "WorkerStat",
    "monthly_salary", "salary_report", "report_totals",
    "mark_auto_present", "save_manual_sheet", "monthly_presence",
    "record_daily_sales", "sales_total",
    "MemoryAttendanceStore", "MemoryDutyStore", "MemorySalesStore",
]
