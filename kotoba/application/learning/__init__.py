"""
Learning bounded context - Application layer.

Contains use cases for learning progress:
- Course enrollment: enroll, list, fetch, report completed lessons
- Vocabulary review: start learning, list, due items, submit reviews
"""
