from enum import Enum


class TransactionType(str, Enum):

    PAYMENT = "PAYMENT"
    REFUND = "REFUND"
    ADJUSTMENT = "ADJUSTMENT"


class PaymentMethod(str, Enum):

    CASH = "CASH"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    PIX = "PIX"
    BANK_TRANSFER = "BANK_TRANSFER"
    OTHER = "OTHER"


class PaymentStatus(str, Enum):

    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"


class ReportType(str, Enum):

    OCCUPANCY = "occupancy"
    REVENUE = "revenue"
    RESERVATIONS = "reservations"
    FINANCIAL = "financial"
