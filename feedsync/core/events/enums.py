"""Event type enum: the vocabulary of the sync event log."""

from enum import Enum


class EventType(str, Enum):
    """Types of events appended to the event log."""

    ITERATION_SUCCESS = "ITERATION_SUCCESS"
    ITERATION_FAILURE = "ITERATION_FAILURE"

    FETCH_NEW_CONTENT_ERROR = "FETCHNEWCONTENT_ERROR"
    FETCH_INTERACTIONS_ERROR = "FETCHINTERACTIONS_ERROR"
    FETCH_POSTS_ERROR = "FETCHPOSTS_ERROR"
    FETCH_COMMENTS_ERROR = "FETCHCOMMENTS_ERROR"
    DISCOVER_USERS_ERROR = "FETCHSKYFEEDUSERS_ERROR"
