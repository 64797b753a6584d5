"""
queueslots - bookable time-slot resolution for branch queues and reservations.
"""

__version__ = "0.1.0"
