"""IS 456 reinforcement design and layout optimization for slabs, beams and columns."""

from loguru import logger

__version__ = "0.1.0"

# Library logging stays silent until an application opts in
logger.disable("rebar_design")
