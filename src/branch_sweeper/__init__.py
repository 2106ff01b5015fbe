"""Prune merged git branches.

Features:
- Select local and remote branches merged into any base branch
- Glob pattern filtering with a protected branch allow-list
- Dry-run by default, explicit apply mode for deletion
- Safe or forced local deletion
"""

__version__ = "0.1.0"
