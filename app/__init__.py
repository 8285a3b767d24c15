"""Notification targeting and delivery service."""
