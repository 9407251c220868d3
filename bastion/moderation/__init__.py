from .eligibility import assess
from .models import ModerationAction, ModerationEligibility, ModerationParameters
from .pipeline import moderate

__all__ = ["assess", "moderate", "ModerationAction", "ModerationEligibility", "ModerationParameters"]
