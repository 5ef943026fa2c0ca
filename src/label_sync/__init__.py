"""label-sync.

Keeps the labels of GitHub repositories in line with a declarative
configuration file:
- additions and updates are always applied
- removals only in strict mode
- nothing is applied outside the publish branch (dry run)
"""

__version__ = "0.1.0"

from label_sync.labels import Label, hydrate

__all__ = ["__version__", "Label", "hydrate"]
