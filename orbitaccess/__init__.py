"""
.. module:: orbitaccess
   :synopsis: Access and gap analysis of satellite trajectories.

Access (visibility, eclipse, beta-angle threshold) windows of a satellite are
found by sampling a boolean predicate at a fixed step and refining every change
of value with bisection.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
