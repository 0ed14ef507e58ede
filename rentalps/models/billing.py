# Payment models
from enum import Enum
from datetime import date
from decimal import Decimal
from rentalps import db


class PaymentStatus(Enum):
    """Derived payment status of a reservation (never stored)"""
    UNPAID = ('unpaid', 'Belum Dibayar')
    PARTIALLY_PAID = ('partially paid', 'Dibayar Sebagian')
    PAID = ('paid', 'Lunas')

    def __init__(self, code, name):
        self.code = code
        self.display_name = name


class PaymentMethod(Enum):
    CASH = ('CASH', 'Tunai')
    QRIS = ('QRIS', 'QRIS')
    DEBIT = ('DEBIT', 'Kartu Debit')
    TRANSFER = ('TRANSFER', 'Transfer Bank')

    def __init__(self, code, name):
        self.code = code
        self.display_name = name

    @classmethod
    def from_code(cls, code):
        for method in cls:
            if method.code == str(code).strip().upper():
                return method
        return None


def derive_payment_status(total_price, payment):
    """
    Payment status from the reservation total and its payment row.

    No payment or a zero amount is unpaid, an amount below the total is
    partially paid, anything else is paid.
    """
    if payment is None:
        return PaymentStatus.UNPAID
    amount = Decimal(payment.amount or 0)
    if amount <= 0:
        return PaymentStatus.UNPAID
    if amount < Decimal(total_price or 0):
        return PaymentStatus.PARTIALLY_PAID
    return PaymentStatus.PAID


class Payment(db.Model):
    """
    Payment of a reservation (one row per reservation, updated in place
    when a top-up is needed)
    """
    __tablename__ = 'payment'

    id = db.Column('id_payment', db.Integer, primary_key=True)
    amount = db.Column('total_bayar', db.Numeric(12, 2), nullable=False, default=0)
    paid_on = db.Column('tanggal_bayar', db.Date, nullable=False, default=date.today, index=True)
    method = db.Column('payment_method', db.String(20), nullable=False, default='CASH')

    # Back reference to the reservation holding payment_id
    reservation = db.relationship('Reservation', back_populates='payment', uselist=False)

    def get_method_display(self):
        method = PaymentMethod.from_code(self.method)
        return method.display_name if method else self.method

    def to_dict(self):
        return {
            'id_payment': self.id,
            'total_bayar': float(self.amount or 0),
            'tanggal_bayar': self.paid_on.strftime('%Y-%m-%d') if self.paid_on else None,
            'payment_method': self.method,
            'payment_method_display': self.get_method_display(),
        }

    def __repr__(self):
        return f'<Payment {self.id}: {self.amount} ({self.method})>'
