from app.core.database import Base

# Import all models here to ensure they are registered with Base.
# Tables are created by Database.create_all() at startup (or by manage_db.py).
from .role import Role
from .user import User
from .tournament import Tournament
from .team import Team
from .player import Player
from .match import Match
from .event import MatchEvent
