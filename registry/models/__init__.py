from .citizen import Citizen
from .military import MilitaryPersonnel
from .request import Request
from .reminder import Reminder
from .profile import UserProfile

__all__ = ["Citizen", "MilitaryPersonnel", "Request", "Reminder", "UserProfile"]
