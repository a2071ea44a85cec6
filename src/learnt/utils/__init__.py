"""Utility modules for Learnt."""

from learnt.utils.timeutils import local_now, start_of_day, to_day

__all__ = ["local_now", "start_of_day", "to_day"]
