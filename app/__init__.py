"""
Training & Placement Portal
Students track their progress through company placement drives.

Architecture:
- MongoDB: users and placement drives (registrations embedded per drive)
- FastAPI: REST API consumed by the student and admin web apps
"""

__version__ = "1.0.0"
