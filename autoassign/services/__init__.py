from .assignment import AssignmentService, EventOutcome

__all__ = ["AssignmentService", "EventOutcome"]
