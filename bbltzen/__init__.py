"""
BBltZen - pricing and order-total core of the bubble-tea ordering system
"""

import logging

__version__ = "1.0.0"

# Silent until the host calls bbltzen.bootstrap / setup_logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
