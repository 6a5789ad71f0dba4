from . import analysis, charts, entries, settings

__all__ = ['analysis', 'charts', 'entries', 'settings']
