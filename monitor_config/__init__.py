"""monitor-config: save and restore KDE multi-monitor layouts via kscreen-doctor."""

__version__ = '1.0.0'
