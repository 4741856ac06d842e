# terra_server/entities/statuses.py
from enum import Enum


class DonationStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
