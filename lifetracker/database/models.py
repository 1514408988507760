"""
Database models for Life Tracker.

The tracker persists four named collections (quests, daily_logs,
user_settings, reminders). Each collection is one JSON document in a
single table; the document shapes are described in core/schemas.py.
"""

from tortoise import fields, models


class CollectionDocument(models.Model):
    """One named collection stored as a JSON document."""

    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=64, unique=True, db_index=True)

    # Plain nested dicts/lists; no schema enforcement at this level
    data: dict = fields.JSONField(default={})

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "collections"
