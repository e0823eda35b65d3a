from .agent import Mind
from .client import VoidClient
from .memory import LocalMemory
from .patterns import PatternSignal, PatternTable
from .senses import MindRole

__all__ = ["Mind", "MindRole", "VoidClient", "LocalMemory", "PatternTable", "PatternSignal"]
