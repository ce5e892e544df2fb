"""Generate and clean Storybook stories for React/TSX components."""

from .orchestrator import Orchestrator, clean, generate

__all__ = ["Orchestrator", "clean", "generate"]
