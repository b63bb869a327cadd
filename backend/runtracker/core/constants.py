"""Shared application constants.

Values the goal, activity and statistics code agree on, kept in one place.
"""

# Goal types and the activity field each one aggregates
GOAL_TYPE_DISTANCE = "distance"
GOAL_TYPE_TIME = "time"
GOAL_TYPE_FREQUENCY = "frequency"

# Goal lifecycle states. "paused" is only ever set by an explicit request.
GOAL_STATUS_ACTIVE = "active"
GOAL_STATUS_COMPLETED = "completed"
GOAL_STATUS_PAUSED = "paused"

# Activity listing pagination
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500
