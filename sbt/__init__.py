"""Explicit bijections from pairs of opposing injections, by the Schroeder-Bernstein construction"""

# Add imports here
from .mappings.construct import construct_bijection

from ._version import __version__

TOOLKIT_NAME : str = 'The Schroeder-Bernstein Toolkit (SBT)'
