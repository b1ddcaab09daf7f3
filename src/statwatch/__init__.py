"""statwatch: poll files for changes and react to them.

Watches a fixed list of paths by comparing stat snapshots at a fixed
interval, reports what changed, and can run a shell command or ring the
terminal bell on change.
"""

__version__ = "0.1.0"
