"""Terminal user interface: key decoding, key handling and screen drawing."""
from kilo.ui import keys, screen, input
