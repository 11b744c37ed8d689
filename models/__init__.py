# Import all models to ensure they are registered with SQLAlchemy
from .user import User
from .checkin import DailyCheckInRecord, CheckInHistory

# Make models available at package level
__all__ = ['User', 'DailyCheckInRecord', 'CheckInHistory']
