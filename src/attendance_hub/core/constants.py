"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_CHECKIN_CUTOFF = time(9, 0)
DEFAULT_REMINDER_AFTER = time(8, 30)
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_NOTIFICATION_LIMIT = 20
DEFAULT_ADMIN_LIST_LIMIT = 500
HOURS_PRECISION = 2

LATE_TITLE = "Late Arrival Recorded"
LATE_MESSAGE = "You checked in after {cutoff}."

REMINDER_TITLE = "Attendance Reminder"
REMINDER_MESSAGE = "Don't forget to check in today!"

LEAVE_APPROVED_TITLE = "Leave Approved"
LEAVE_REJECTED_TITLE = "Leave Rejected"

# photo_in / photo_out are MEDIUMTEXT (16 MiB); data URLs are ASCII
MAX_PHOTO_LENGTH = 16 * 1024 * 1024 - 1
