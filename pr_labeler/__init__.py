"""
Label pull requests from the files they change.
"""

import logging
import os
import sys

__version__ = "0.1.0"

# Everything logs under the "pr_labeler" logger, to stderr so that stdout is
# left for command output.  LOGLEVEL=DEBUG shows how each rule was decided.
log_level = os.environ.get('LOGLEVEL', 'INFO').upper()
logger = logging.getLogger(__name__)
handler = logging.StreamHandler(sys.stderr)
handler.setLevel(log_level)
logger.addHandler(handler)
logger.setLevel(log_level)
