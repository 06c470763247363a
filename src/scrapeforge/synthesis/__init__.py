"""Script synthesis: emits standalone scraping scripts from a configuration."""

from scrapeforge.synthesis.literals import SCRIPT_IDENTIFIERS, py_str
from scrapeforge.synthesis.synthesizer import synthesize, synthesize_job

__all__ = ['SCRIPT_IDENTIFIERS', 'py_str', 'synthesize', 'synthesize_job']
