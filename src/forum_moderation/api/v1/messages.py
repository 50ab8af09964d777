"""Flash messages surfaced by the API.

The wording is presentation; the conditions under which each one is shown
are decided by the moderation core.
"""

TOPIC_CREATED = "This topic has been created."
TOPIC_PENDING = (
    "This topic is currently pending review. "
    "Only the user who created it and moderators can view it."
)
REPLY_POSTED = "Your reply has been posted."
POST_PENDING = (
    "This post is currently pending review. "
    "Only the user who posted it and moderators can view it."
)
SPAM_FLAGGED = (
    "Your account has been flagged for spam. You cannot create a new {kind} at this time."
)
NOT_FOUND = "The {kind} you are looking for could not be found."
MODERATED = "The selected posts have been moderated."
ACCESS_DENIED = "You are not allowed to perform that action."
INTERNAL_ERROR = "Something went wrong. Please try again later."
