"""
Fixed user-facing message constants.

Messages that several commands share live here so that the wording stays
identical no matter which event kind triggered them.
"""

MESSAGE_INVALID_COMMAND_FORMAT = "Invalid command format! \n{usage}"
MESSAGE_UNKNOWN_COMMAND = "Unknown command"

MESSAGE_INVALID_INDEX = "Index is not a non-zero unsigned integer."
MESSAGE_INVALID_EVENT_DISPLAYED_INDEX = "The event index provided is invalid"
MESSAGE_INVALID_STUDENT_DISPLAYED_INDEX = "The student index provided is invalid"

MESSAGE_INVALID_DATE = "Dates should be in the format YYYY-MM-DD"
MESSAGE_INVALID_EVENT_NAME = (
    "Event names should only contain letters, digits, spaces, '-' and '_', "
    "and they should not be blank"
)
MESSAGE_INVALID_FILE_PATH = "File paths should not be blank"

MESSAGE_CONSULTATION_NO_FILES = "Consultation events do not have files attached to them"

MESSAGE_DUPLICATE_EVENT = "This event already exists in the roster"
MESSAGE_DUPLICATE_STUDENT_IN_EVENT = "This student is already in the event"
MESSAGE_STUDENT_NOT_IN_EVENT = "This student is not in the event"
MESSAGE_NOT_EDITED = "At least one field to edit must be provided."
MESSAGE_NO_FILE_ATTACHED = "This event has no file attached"
MESSAGE_FILE_NOT_FOUND = "File not found: {path}"
MESSAGE_FILE_NOT_OPENED = "Could not open file: {path}"

MESSAGE_EVENTS_LISTED_OVERVIEW = "{count} events listed!"

MESSAGE_INVALID_REPETITIONS = "Repetitions should be a whole number from 1 to {limit}"
MESSAGE_INVALID_NOTE_DISPLAYED_INDEX = "The note index provided is invalid"
MESSAGE_EMPTY_NOTE = "Notes should not be blank"
