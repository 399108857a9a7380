from .user import User, user_thoughts, friendships
from .thought import Thought
from .reaction import Reaction

__all__ = [
    "User",
    "Thought",
    "Reaction",
    "user_thoughts",
    "friendships",
]
