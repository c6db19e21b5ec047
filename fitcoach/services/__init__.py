"""Scheduling services: plan resolution, session lifecycle, reminders, calendars."""
