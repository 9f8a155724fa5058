# app/routers/__init__.py

# Import all router modules to make them available
from . import households
from . import invitations
from . import pantries
from . import shopping_lists
from . import recipes

__all__ = [
    "households",
    "invitations",
    "pantries",
    "shopping_lists",
    "recipes",
]
