from .update import Update
