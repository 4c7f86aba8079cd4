# modules/accounting/models.py
# Лише схема: проведення по рахунках поки не реалізоване.

from datetime import datetime

from extensions import db


class Account(db.Model):
    """План рахунків (chart of accounts)."""
    __tablename__ = 'coa'

    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(32), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(16), nullable=False)  # Asset, Liability, Equity, Income, Expense
    parent_id = db.Column(db.Integer, db.ForeignKey('coa.id'))

    parent = db.relationship('Account', remote_side=[id], backref='children')


class Journal(db.Model):
    __tablename__ = 'journals'

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False)
    reference = db.Column(db.String(255))
    description = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    entries = db.relationship('JournalEntry', backref='journal', cascade='all, delete-orphan')


class JournalEntry(db.Model):
    __tablename__ = 'journal_entries'

    id = db.Column(db.Integer, primary_key=True)
    journal_id = db.Column(db.Integer, db.ForeignKey('journals.id'), nullable=False, index=True)
    coa_id = db.Column(db.Integer, db.ForeignKey('coa.id'), nullable=False)
    debit = db.Column(db.Float, nullable=False, default=0.0)
    credit = db.Column(db.Float, nullable=False, default=0.0)

    account = db.relationship('Account')
