"""
System-wide constants for Workflow Radar.
"""

from enum import Enum


# =============================================================================
# Enums
# =============================================================================


class Provider(str, Enum):
    """Trackers that produce events."""

    LINEAR = "linear"
    GITHUB = "github"


class ActorType(str, Enum):
    """Kinds of actors behind an event."""

    HUMAN = "human"
    CHARLIE = "charlie"
    BOT = "bot"


class WorkflowStatus(str, Enum):
    """Derived lifecycle state of a workflow."""

    ACTIVE = "active"
    COMPLETED = "completed"
    BLOCKED = "blocked"
    IDLE = "idle"


class RecommendationPriority(str, Enum):
    """Priority of a cross-workflow recommendation."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Frequency(str, Enum):
    """How often a radar runs."""

    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class NotifyCondition(str, Enum):
    """When a radar notifies its owner."""

    ALWAYS = "always"
    SIGNIFICANT_CHANGE = "significant_change"
    THRESHOLD = "threshold"
    NEVER = "never"


# =============================================================================
# API Constants
# =============================================================================

API_VERSION = "v1"
API_PREFIX = f"/api/{API_VERSION}"

REQUEST_ID_HEADER = "X-Request-ID"

# =============================================================================
# Event Type Tags
# =============================================================================

EVENT_ISSUE_CLOSED = "issue.closed"
EVENT_ISSUE_STATUS_CHANGED = "issue.status_changed"
EVENT_PR_MERGED = "pr.merged"
EVENT_CI_CHECK_RUN = "ci.check_run"

COMPLETION_EVENT_TYPES = frozenset({EVENT_ISSUE_CLOSED, EVENT_PR_MERGED})

# Issue states (lower-cased) treated as terminal or blocking
DONE_STATES = frozenset({"done", "completed", "closed", "merged", "canceled", "cancelled"})
BLOCKED_STATES = frozenset({"blocked", "on hold", "on_hold"})

FAILED_CHECK_CONCLUSIONS = frozenset({"failure", "failed", "timed_out", "cancelled", "action_required"})

# =============================================================================
# Interpretation Constants
# =============================================================================

MAX_INTERPRETATION_INPUT_CHARS = 500
NOTIFICATION_OPTION_COUNT = 3
MAX_SUGGESTED_INSIGHTS = 3

# =============================================================================
# Suggestion Constants
# =============================================================================

MIN_SUGGESTION_INPUT_CHARS = 2
MAX_SUGGESTIONS = 4

# =============================================================================
# Analysis Constants
# =============================================================================

IMPORTANCE_RANGE = (1, 10)
