"""Kanban board client with optimistic drag reordering."""
