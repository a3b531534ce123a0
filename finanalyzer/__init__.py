"""Core modules for the FinAnalyzer dashboard."""

from . import config, errors, financials, narrative, parsing, state, synth, utils, viz

__all__ = [
	"config",
	"errors",
	"financials",
	"narrative",
	"parsing",
	"state",
	"synth",
	"utils",
	"viz",
]
