from .station import Station
from .user import User
from .helper import Helper
from .duty import Duty
from .attendance import Attendance
from .sales import DailySales

__all__ = ["Station", "User", "Helper", "Duty", "Attendance", "DailySales"]
