"""Protocol constants.

Keep these in one place to avoid stringly-typed response handling.
"""

# Request operations
ENQUEUE = "ENQUEUE"
DEQUEUE = "DEQUEUE"
LIST = "LIST"

# Response status markers
OK = "OK"
ERR = "ERR"

# The one ERR reason that is not an error: dequeue found nothing.
QUEUE_EMPTY = "Queue empty"

# Limits imposed by the server.
MAXIMUM_QUEUE_NAME = 255
MAXIMUM_MESSAGE = 100 * 1024 * 1024
MAXIMUM_LINE = 1024
