"""Operational scripts: Firestore seeding and the scheduled listing sweep."""
