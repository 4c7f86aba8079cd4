# -*- coding: utf-8 -*-
"""Демо-дані для порожньої бази (викликається при старті, якщо SEED_DEMO_DATA)."""

from datetime import date

from flask import current_app

from extensions import db
from modules.accounting.models import Account
from modules.crm.models import Lead
from modules.reference.employees.models import Employee
from modules.reference.partners.models import Partner, PartnerType
from modules.reference.products.models import Product


def seed_demo_data() -> bool:
    """Повертає True, якщо дані були додані (лише коли таблиця products порожня)."""
    if Product.query.count() > 0:
        return False

    db.session.add(Product(
        code='P001', name='Laptop Pro 14', category='Electronics', unit='Unit',
        purchase_price=1200, sales_price=1500, stock_qty=10,
    ))
    db.session.add_all([
        Partner(type=PartnerType.CUSTOMER.value, name='John Doe Corp', email='john@example.com'),
        Partner(type=PartnerType.SUPPLIER.value, name='Global Tech Ltd', email='sales@globaltech.com'),
        Account(code='1000', name='Cash', type='Asset'),
        Account(code='4000', name='Sales Revenue', type='Income'),
        Lead(name='Alice Smith', company='Tech Solutions', status='QUALIFIED', value=5000,
             last_follow_up=date(2024, 2, 20)),
        Lead(name='Bob Jones', company='Creative Agency', status='NEW', value=2500,
             last_follow_up=date(2024, 2, 22)),
        Lead(name='Charlie Brown', company='Retail Hub', status='PROPOSAL', value=12000,
             last_follow_up=date(2024, 2, 18)),
        Employee(name='Emma Wilson', position='Senior Developer', department='Engineering',
                 join_date=date(2023, 1, 15), salary=8500),
        Employee(name='Liam Johnson', position='Product Manager', department='Product',
                 join_date=date(2023, 5, 10), salary=7500),
    ])
    db.session.commit()
    current_app.logger.info("Demo data seeded")
    return True
