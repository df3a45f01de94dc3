"""
Learning bounded context - Domain layer.

Tracks how far a learner got through a course and how well a
vocabulary item has been memorised.
"""
