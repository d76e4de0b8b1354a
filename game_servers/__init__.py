"""Startup, shutdown, update and backup of personal game servers in tmux sessions"""

__version__ = '0.4.0'
