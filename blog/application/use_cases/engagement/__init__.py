"""Engagement use cases (likes, views)."""

from blog.application.use_cases.engagement.engagement_operations import EngagementService

__all__ = ["EngagementService"]
