"""Control USB HID relay boards."""

import logging

__version__ = "0.1.0"

# Library records reach the user only through handlers the caller installs.
logging.getLogger(__name__).addHandler(logging.NullHandler())
