from .assets import Assets
from .jobs import Jobs
from .user import User

__all__ = ["Assets", "Jobs", "User"]
