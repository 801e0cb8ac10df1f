"""Database row type definitions."""

from fruitnut.models.center import DonationCenter
from fruitnut.models.donation import Donation, DonationStatus
from fruitnut.models.farm import Farm
from fruitnut.models.profile import UserProfile
from fruitnut.models.shift import Shift, ShiftSignup, ShiftStatus

__all__ = [
    "DonationCenter",
    "Donation",
    "DonationStatus",
    "Farm",
    "UserProfile",
    "Shift",
    "ShiftSignup",
    "ShiftStatus",
]
