"""Local persistence for Level Up"""
from levelup.storage.json_store import JsonStore, system_goal_id

__all__ = ["JsonStore", "system_goal_id"]
